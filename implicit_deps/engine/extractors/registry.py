"""Extractor registry — match compiled-output files to reference extractors."""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ReferenceExtractor(Protocol):
    """Interface that every class-reference extractor must satisfy."""

    detection_method: str
    file_patterns: list[str]

    def extract(self, file_path: Path, content: str) -> set[str]: ...


EXTRACTOR_REGISTRY: dict[str, ReferenceExtractor] = {}


def register_extractor(extractor: ReferenceExtractor) -> None:
    """Register an extractor instance by its detection_method."""
    EXTRACTOR_REGISTRY[extractor.detection_method] = extractor


def extractor_for(file_path: Path) -> ReferenceExtractor | None:
    """Return the first registered extractor whose patterns match the file name."""
    for extractor in EXTRACTOR_REGISTRY.values():
        if any(fnmatch(file_path.name, pattern) for pattern in extractor.file_patterns):
            return extractor
    return None


def discover_listings(root: Path) -> list[tuple[ReferenceExtractor, Path]]:
    """Walk *root* and match reference listings to registered extractors.

    Returns a list of (extractor, matched_file) pairs in a stable order.
    """
    matches: list[tuple[ReferenceExtractor, Path]] = []
    for extractor in EXTRACTOR_REGISTRY.values():
        for pattern in extractor.file_patterns:
            for hit in sorted(root.rglob(pattern)):
                if hit.is_file():
                    matches.append((extractor, hit))
    return matches
