"""Reconcile referenced classes against declared dependencies.

Given the classes a project references and an index of which resolved
artifacts provide each class, work out which artifacts are used but never
declared. Each offending class contributes one representative artifact,
picked deterministically so repeated runs render byte-identical reports.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import structlog

from implicit_deps.engine.filters import any_match, ignore_filter, self_filter
from implicit_deps.engine.models import Artifact
from implicit_deps.exceptions import ImplicitDependencyViolation

log = structlog.get_logger("implicit_deps.reconcile")

ClassIndex = Callable[[str], Sequence[Artifact]]
SortKey = Callable[[Artifact], str]


def by_display_name(artifact: Artifact) -> str:
    return artifact.display_name


@dataclass(frozen=True)
class ReconcileOptions:
    """Everything about the current project the reconciliation needs."""

    project_path: str
    build_file: str = "build.gradle"
    ignore: frozenset[str] = frozenset()
    suggestion_bucket: str = "implementation"


def candidate_sets(
    referenced_classes: Iterable[str], class_index: ClassIndex
) -> set[tuple[Artifact, ...]]:
    """Distinct non-empty provider lists for the referenced classes."""
    sets: set[tuple[Artifact, ...]] = set()
    for class_name in referenced_classes:
        candidates = tuple(class_index(class_name))
        if candidates:
            sets.add(candidates)
    return sets


def find_undeclared(
    referenced_classes: Iterable[str],
    class_index: ClassIndex,
    declared_artifacts: Iterable[Artifact],
    options: ReconcileOptions,
    key: SortKey = by_display_name,
) -> list[Artifact]:
    """Return one artifact per implicit dependency, sorted by *key*.

    A candidate set is dropped when any of its artifacts is produced by the
    current project, is ignored, or is already declared.
    """
    declared = frozenset(declared_artifacts)
    excluders = (
        self_filter(options.project_path),
        ignore_filter(options.ignore),
        declared.__contains__,
    )

    def total(artifact: Artifact) -> tuple[str, str]:
        # repr breaks ties between distinct artifacts with equal keys
        return key(artifact), repr(artifact)

    chosen: set[Artifact] = set()
    for candidates in candidate_sets(referenced_classes, class_index):
        if any(any_match(candidates, excluded) for excluded in excluders):
            continue
        chosen.add(min(candidates, key=total))

    undeclared = sorted(chosen, key=total)
    log.debug("reconcile.done", declared=len(declared), undeclared=len(undeclared))
    return undeclared


def suggestion_line(artifact: Artifact, bucket: str) -> str:
    if artifact.is_project:
        notation = f"project('{artifact.project_path}')"
    else:
        notation = f"'{artifact.coordinate.identity}'"
    return f"    {bucket} {notation}"


def render_suggestion(artifacts: Iterable[Artifact], bucket: str) -> str:
    """Render a ``dependencies { ... }`` block, lines sorted lexicographically."""
    lines = sorted(suggestion_line(a, bucket) for a in artifacts)
    return "    dependencies {\n" + "\n".join(lines) + "\n    }"


def check(
    referenced_classes: Iterable[str],
    class_index: ClassIndex,
    declared_artifacts: Iterable[Artifact],
    options: ReconcileOptions,
    key: SortKey = by_display_name,
) -> None:
    """Raise :class:`ImplicitDependencyViolation` if anything is undeclared."""
    undeclared = find_undeclared(
        referenced_classes, class_index, declared_artifacts, options, key=key
    )
    if not undeclared:
        return
    raise ImplicitDependencyViolation(
        undeclared,
        options.build_file,
        render_suggestion(undeclared, options.suggestion_bucket),
    )
