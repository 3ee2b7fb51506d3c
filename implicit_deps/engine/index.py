"""Index of which resolved artifact provides which class."""

from __future__ import annotations

import re
import zipfile
from collections.abc import Iterable
from pathlib import Path

import structlog

from implicit_deps.engine.models import Artifact, ArtifactSource, ResolvedDependency

log = structlog.get_logger("implicit_deps.index")

_VERSIONED_PREFIX_RE = re.compile(r"^META-INF/versions/\d+/")
_SKIPPED_CLASSES = {"module-info", "package-info"}


def class_name_from_entry(entry: str) -> str | None:
    """Turn ``com/foo/Bar$Baz.class`` into ``com.foo.Bar$Baz``.

    Returns None for entries that are not classes or that never get
    referenced by name.
    """
    if not entry.endswith(".class"):
        return None
    entry = _VERSIONED_PREFIX_RE.sub("", entry.replace("\\", "/"))
    if entry.startswith("META-INF/"):
        return None
    stem = entry[: -len(".class")]
    if stem.rsplit("/", 1)[-1] in _SKIPPED_CLASSES:
        return None
    return stem.replace("/", ".")


def list_classes(path: Path) -> set[str]:
    """Classes provided by a jar or a class-output directory.

    Only the archive directory is read; class files are never opened.
    """
    if path.is_dir():
        entries: Iterable[str] = (p.relative_to(path).as_posix() for p in path.rglob("*.class"))
    else:
        with zipfile.ZipFile(path) as jar:
            entries = jar.namelist()
    classes = set()
    for entry in entries:
        name = class_name_from_entry(entry)
        if name is not None:
            classes.add(name)
    return classes


def source_classes(source: ArtifactSource) -> set[str]:
    classes = set(source.classes)
    if source.file is None:
        return classes
    if not source.file.exists():
        log.warning("index.artifact_missing", artifact=source.artifact.display_name, file=str(source.file))
        return classes
    classes |= list_classes(source.file)
    return classes


class ArtifactIndex:
    """Maps class names to the artifacts that provide them.

    Built once per check from the declared dependencies' transitive trees
    and read-only afterwards. Candidates keep first-seen order.
    """

    def __init__(self) -> None:
        self._providers: dict[str, list[Artifact]] = {}
        self._indexed: set[Artifact] = set()

    @classmethod
    def build(cls, declared: Iterable[ResolvedDependency]) -> ArtifactIndex:
        index = cls()
        visited: set[str] = set()
        for dependency in declared:
            index._walk(dependency, visited)
        log.debug("index.built", classes=len(index._providers), artifacts=len(index._indexed))
        return index

    def _walk(self, dependency: ResolvedDependency, visited: set[str]) -> None:
        stack = [dependency]
        while stack:
            node = stack.pop()
            if node.identity in visited:
                continue
            visited.add(node.identity)
            for source in node.artifact_sources:
                self.add(source)
            # reversed so children are visited in declaration order
            stack.extend(reversed(node.children))

    def add(self, source: ArtifactSource) -> None:
        for class_name in sorted(source_classes(source)):
            self.add_class(class_name, source.artifact)
        self._indexed.add(source.artifact)

    def add_class(self, class_name: str, artifact: Artifact) -> None:
        providers = self._providers.setdefault(class_name, [])
        if artifact not in providers:
            providers.append(artifact)

    def classes_to_artifacts(self, class_name: str) -> tuple[Artifact, ...]:
        return tuple(self._providers.get(class_name, ()))

    __call__ = classes_to_artifacts

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, class_name: object) -> bool:
        return class_name in self._providers
