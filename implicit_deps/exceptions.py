"""Custom exceptions for implicit-deps."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from implicit_deps.engine.models import Artifact


class ImplicitDepsError(Exception):
    """Base exception for all implicit-deps errors."""


class ConfigError(ImplicitDepsError):
    """Raised when the check configuration is missing or invalid."""


class ResolutionError(ImplicitDepsError):
    """Raised when a resolution report is malformed or names an unknown bucket."""


class ReferenceExtractionError(ImplicitDepsError):
    """Raised when no extractor can read a compiled-output location."""


class ImplicitDependencyViolation(ImplicitDepsError):
    """Raised when referenced classes come from artifacts that are not declared.

    Always fatal: the report aggregates every offending artifact so the user
    can fix the build file in one pass.
    """

    def __init__(self, artifacts: list[Artifact], build_file: str, suggestion: str):
        self.artifacts = artifacts
        self.build_file = build_file
        self.suggestion = suggestion
        super().__init__(
            f"Found {len(artifacts)} implicit dependencies - consider adding the following "
            f"explicit dependencies to '{build_file}', or avoid using classes from these "
            f"jars:\n{suggestion}"
        )
