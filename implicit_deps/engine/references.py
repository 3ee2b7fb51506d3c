"""Collect the classes referenced by a project's compiled output."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

# Ensure extractors are registered before any extraction runs.
import implicit_deps.engine.extractors  # noqa: F401
from implicit_deps.engine.extractors.registry import discover_listings, extractor_for
from implicit_deps.exceptions import ReferenceExtractionError

log = structlog.get_logger("implicit_deps.references")


def extract(location: Path) -> set[str]:
    """Referenced classes for one compiled-output file or directory."""
    if location.is_dir():
        matches = discover_listings(location)
        if not matches:
            log.warning("references.no_listings", location=str(location))
    else:
        extractor = extractor_for(location)
        if extractor is None:
            raise ReferenceExtractionError(f"no extractor for compiled output {location}")
        matches = [(extractor, location)]

    classes: set[str] = set()
    for extractor, file_path in matches:
        content = file_path.read_text(encoding="utf-8", errors="replace")
        found = extractor.extract(file_path, content)
        log.debug(
            "references.extracted",
            file=str(file_path),
            extractor=extractor.detection_method,
            classes=len(found),
        )
        classes |= found
    return classes


def referenced_classes(locations: Iterable[Path]) -> set[str]:
    """Union of the references found in every compiled-output location."""
    classes: set[str] = set()
    for location in locations:
        classes |= extract(location)
    return classes
