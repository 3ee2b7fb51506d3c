"""Extractor for plain class listings (one class name per line).

Accepted forms:
  - com.example.Foo
  - com/example/Foo            → com.example.Foo
  - com/example/Foo.class      → com.example.Foo
  - # comment lines and blank lines are skipped
"""

from __future__ import annotations

from pathlib import Path

from implicit_deps.engine.extractors.registry import register_extractor


def normalize_class_name(raw: str) -> str:
    name = raw.strip()
    if name.endswith(".class"):
        name = name[: -len(".class")]
    return name.replace("/", ".")


class ClassListingExtractor:
    detection_method = "listing"
    file_patterns = ["*.classes", "*.refs"]

    def extract(self, file_path: Path, content: str) -> set[str]:
        classes: set[str] = set()
        for raw in content.splitlines():
            # Strip inline comments
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            classes.add(normalize_class_name(line))
        return classes


register_extractor(ClassListingExtractor())
