"""Data models for the implicit dependency check."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


def ignore_coordinate(group: str, name: str) -> str:
    """Build the ignore identity for a module, e.g. ``org.slf4j:slf4j-api``."""
    return f"{group}:{name}" if group else name


@dataclass(frozen=True, order=True)
class ModuleCoordinate:
    """Module coordinate as published to a repository (group may be empty)."""

    group: str
    name: str
    version: str = ""

    @property
    def identity(self) -> str:
        """``group:name``, or just ``name`` for group-less modules."""
        return ignore_coordinate(self.group, self.name)

    def __str__(self) -> str:
        return f"{self.identity}:{self.version}" if self.version else self.identity

    @classmethod
    def parse(cls, notation: str) -> ModuleCoordinate:
        """Parse ``group:name:version``, ``group:name`` or ``name:version``.

        Two-part notations are read as ``group:name`` unless the second part
        starts with a digit, in which case they are ``name:version``.
        """
        parts = notation.strip().split(":")
        if any(not p for p in parts) or not 1 <= len(parts) <= 3:
            raise ValueError(f"invalid module notation: {notation!r}")
        if len(parts) == 3:
            return cls(parts[0], parts[1], parts[2])
        if len(parts) == 2:
            if parts[1][0].isdigit():
                return cls("", parts[0], parts[1])
            return cls(parts[0], parts[1])
        return cls("", parts[0])


@dataclass(frozen=True)
class ExternalArtifact:
    """A jar published by an external module."""

    coordinate: ModuleCoordinate
    classifier: str | None = None

    is_project = False

    @property
    def display_name(self) -> str:
        base = str(self.coordinate)
        return f"{base}:{self.classifier}" if self.classifier else base

    @property
    def ignore_identity(self) -> str:
        base = self.coordinate.identity
        return f"{base}|{self.classifier}" if self.classifier else base

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class ProjectArtifact:
    """Output of a sibling project in the same build."""

    project_path: str
    coordinate: ModuleCoordinate

    is_project = True

    @property
    def display_name(self) -> str:
        return f"project {self.project_path}"

    @property
    def ignore_identity(self) -> str:
        return self.coordinate.identity

    def __str__(self) -> str:
        return self.display_name


Artifact = Union[ExternalArtifact, ProjectArtifact]


@dataclass(frozen=True)
class ArtifactSource:
    """Where the classes of one resolved artifact can be listed from.

    ``file`` is a jar or a class-output directory; ``classes`` is an explicit
    listing supplied by the resolver. Both may be given.
    """

    artifact: Artifact
    file: Path | None = None
    classes: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ResolvedDependency:
    """A resolved dependency node and its transitive children."""

    artifact_sources: tuple[ArtifactSource, ...] = ()
    children: tuple[ResolvedDependency, ...] = ()
    coordinate: ModuleCoordinate | None = None
    project_path: str | None = None

    @property
    def identity(self) -> str:
        if self.project_path is not None:
            return f"project {self.project_path}"
        return str(self.coordinate) if self.coordinate else "<anonymous>"

    def module_artifacts(self) -> frozenset[Artifact]:
        return frozenset(s.artifact for s in self.artifact_sources)


@dataclass
class CheckResult:
    """Outcome of a passing check."""

    project_path: str
    declared_count: int
    referenced_count: int
    unresolved: list[str] = field(default_factory=list)
