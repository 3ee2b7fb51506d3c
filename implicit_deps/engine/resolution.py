"""Load a resolution report written by the build tool.

The report lists, per dependency bucket (configuration), the resolved
first-level dependencies together with their transitive children and the
artifacts each node contributes.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from implicit_deps.engine.models import (
    Artifact,
    ArtifactSource,
    ExternalArtifact,
    ModuleCoordinate,
    ProjectArtifact,
    ResolvedDependency,
)
from implicit_deps.exceptions import ResolutionError

log = structlog.get_logger("implicit_deps.resolution")


class ArtifactEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file: str | None = None
    classifier: str | None = None
    classes: list[str] = Field(default_factory=list)


class DependencyEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    module: str | None = None
    project: str | None = None
    artifacts: list[ArtifactEntry] = Field(default_factory=list)
    dependencies: list[DependencyEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _needs_identity(self) -> DependencyEntry:
        if self.module is None and self.project is None:
            raise ValueError("dependency needs a 'module' or a 'project'")
        return self


class ResolutionReport(BaseModel):
    """Top-level resolution report document."""

    model_config = ConfigDict(extra="ignore")

    project: str | None = None
    build_file: str | None = None
    configurations: dict[str, list[DependencyEntry]] = Field(default_factory=dict)


class Resolution:
    """A loaded report with its dependency trees converted to domain models."""

    def __init__(self, report: ResolutionReport, base_dir: Path) -> None:
        self.report = report
        self._base_dir = base_dir
        self._buckets: dict[str, list[ResolvedDependency]] = {
            name: [self._convert(entry) for entry in entries]
            for name, entries in report.configurations.items()
        }

    @property
    def project_path(self) -> str | None:
        return self.report.project

    @property
    def build_file(self) -> str | None:
        return self.report.build_file

    @property
    def bucket_names(self) -> list[str]:
        return list(self._buckets)

    def first_level(self, buckets: Iterable[str] | None = None) -> list[ResolvedDependency]:
        """First-level dependencies of the given buckets (all buckets if None).

        Duplicates across buckets are kept once, in first-seen order.
        """
        names = self.bucket_names if buckets is None else list(buckets)
        unknown = [n for n in names if n not in self._buckets]
        if unknown:
            raise ResolutionError(
                f"unknown dependency bucket(s) {unknown}; report has {self.bucket_names}"
            )
        seen: set[str] = set()
        declared: list[ResolvedDependency] = []
        for name in names:
            for dependency in self._buckets[name]:
                if dependency.identity in seen:
                    continue
                seen.add(dependency.identity)
                declared.append(dependency)
        return declared

    def _convert(self, entry: DependencyEntry) -> ResolvedDependency:
        try:
            coordinate = ModuleCoordinate.parse(entry.module) if entry.module else None
        except ValueError as e:
            raise ResolutionError(str(e)) from e
        if coordinate is None:
            # sibling projects without a published coordinate
            coordinate = ModuleCoordinate("", entry.project.rsplit(":", 1)[-1] or entry.project)

        sources = tuple(self._source(entry, coordinate, a) for a in entry.artifacts)
        return ResolvedDependency(
            artifact_sources=sources,
            children=tuple(self._convert(child) for child in entry.dependencies),
            coordinate=coordinate,
            project_path=entry.project,
        )

    def _source(
        self, entry: DependencyEntry, coordinate: ModuleCoordinate, artifact: ArtifactEntry
    ) -> ArtifactSource:
        resolved: Artifact
        if entry.project is not None:
            resolved = ProjectArtifact(entry.project, coordinate)
        else:
            resolved = ExternalArtifact(coordinate, artifact.classifier)
        file = None
        if artifact.file is not None:
            file = Path(artifact.file)
            if not file.is_absolute():
                file = self._base_dir / file
        return ArtifactSource(resolved, file, frozenset(artifact.classes))


def parse_resolution(content: str, base_dir: Path) -> Resolution:
    try:
        report = ResolutionReport.model_validate_json(content)
    except ValidationError as e:
        raise ResolutionError(f"invalid resolution report: {e}") from e
    return Resolution(report, base_dir)


def load_resolution(path: Path) -> Resolution:
    """Read and validate a resolution report from *path*."""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ResolutionError(f"resolution report not found: {path}") from e
    resolution = parse_resolution(content, path.parent)
    log.debug(
        "resolution.loaded",
        path=str(path),
        buckets=resolution.bucket_names,
    )
    return resolution
