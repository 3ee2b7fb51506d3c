"""Per-artifact predicates used to drop candidate sets before reporting."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from implicit_deps.engine.models import Artifact

ArtifactPredicate = Callable[[Artifact], bool]


def is_self(artifact: Artifact, project_path: str) -> bool:
    """True if *artifact* is the output of the project being checked."""
    return artifact.is_project and artifact.project_path == project_path


def is_ignored(artifact: Artifact, ignore: frozenset[str]) -> bool:
    return artifact.ignore_identity in ignore


def self_filter(project_path: str) -> ArtifactPredicate:
    return lambda artifact: is_self(artifact, project_path)


def ignore_filter(ignore: Iterable[str]) -> ArtifactPredicate:
    frozen = frozenset(ignore)
    return lambda artifact: is_ignored(artifact, frozen)


def any_match(candidates: Iterable[Artifact], predicate: ArtifactPredicate) -> bool:
    """A candidate set is excluded as soon as one provider matches."""
    return any(predicate(a) for a in candidates)
