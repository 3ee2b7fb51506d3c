"""ImplicitDependencyChecker — one full check from configuration to verdict."""

from __future__ import annotations

import structlog

from implicit_deps.config import CheckConfig
from implicit_deps.engine.index import ArtifactIndex
from implicit_deps.engine.models import Artifact, CheckResult, ResolvedDependency
from implicit_deps.engine.reconcile import ReconcileOptions, check
from implicit_deps.engine.references import referenced_classes
from implicit_deps.engine.resolution import Resolution, load_resolution
from implicit_deps.exceptions import ConfigError, ImplicitDependencyViolation

log = structlog.get_logger("implicit_deps.checker")

DEFAULT_BUILD_FILE = "build.gradle"


def declared_artifacts(declared: list[ResolvedDependency]) -> frozenset[Artifact]:
    """Flatten the module artifacts of the first-level dependencies."""
    artifacts: set[Artifact] = set()
    for dependency in declared:
        artifacts |= dependency.module_artifacts()
    return frozenset(artifacts)


class ImplicitDependencyChecker:
    """Runs the check for a single project.

    Everything is recomputed per :meth:`run`; nothing is cached between
    invocations.
    """

    def __init__(self, config: CheckConfig) -> None:
        self.config = config

    def options(self, resolution: Resolution) -> ReconcileOptions:
        project_path = self.config.project or resolution.project_path
        if not project_path:
            raise ConfigError("no project path configured and none recorded in the resolution report")
        return ReconcileOptions(
            project_path=project_path,
            build_file=self.config.build_file or resolution.build_file or DEFAULT_BUILD_FILE,
            ignore=frozenset(self.config.ignore),
            suggestion_bucket=self.config.suggestion_bucket,
        )

    def load(self) -> tuple[Resolution, list[ResolvedDependency], ArtifactIndex]:
        resolution = load_resolution(self.config.resolution)
        declared = resolution.first_level(self.config.dependency_buckets)
        return resolution, declared, ArtifactIndex.build(declared)

    def run(self) -> CheckResult:
        """Run the check; raises :class:`ImplicitDependencyViolation` on failure."""
        resolution, declared, index = self.load()
        options = self.options(resolution)
        artifacts = declared_artifacts(declared)
        classes = referenced_classes(self.config.compiled_outputs)

        bound = log.bind(project=options.project_path)
        bound.info(
            "check.start",
            declared=len(artifacts),
            referenced=len(classes),
            indexed_classes=len(index),
        )

        try:
            check(classes, index.classes_to_artifacts, artifacts, options)
        except ImplicitDependencyViolation as e:
            bound.info(
                "check.violation",
                undeclared=[a.display_name for a in e.artifacts],
            )
            raise

        unresolved = sorted(c for c in classes if c not in index)
        bound.info("check.passed", unresolved=len(unresolved))
        return CheckResult(
            project_path=options.project_path,
            declared_count=len(artifacts),
            referenced_count=len(classes),
            unresolved=unresolved,
        )
