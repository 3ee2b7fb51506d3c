"""Check configuration — ``implicit-deps.toml`` loader and validated model."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from implicit_deps.exceptions import ConfigError

DEFAULT_CONFIG_NAME = "implicit-deps.toml"
DEFAULT_SUGGESTION_BUCKET = "implementation"

# Config template written by ``implicit-deps create-config``
CONFIG_TEMPLATE = """\
# Resolution report written by the build tool (JSON).
resolution = "build/implicit-deps/resolution.json"

# Project being checked and its build file, relative to the root project.
# Both default to the values recorded in the resolution report.
# project = ":app"
# build_file = "app/build.gradle"

# Buckets whose first-level dependencies count as declared.
# Defaults to every bucket in the resolution report.
dependency_buckets = ["implementation", "compileOnly"]

# Reference listings for the compiled output (files or directories).
compiled_outputs = ["build/implicit-deps/main.jdeps"]

# Modules that may be used without being declared (group:name).
ignore = []

# Bucket named in the suggested dependencies block.
suggestion_bucket = "implementation"
"""


class CheckConfig(BaseModel):
    """Validated, immutable configuration for one check."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    resolution: Path
    project: str | None = None
    build_file: str | None = None
    dependency_buckets: tuple[str, ...] | None = None
    compiled_outputs: tuple[Path, ...] = ()
    ignore: frozenset[str] = Field(default_factory=frozenset)
    suggestion_bucket: str = DEFAULT_SUGGESTION_BUCKET

    @field_validator("ignore")
    @classmethod
    def _ignore_identities(cls, value: frozenset[str]) -> frozenset[str]:
        for identity in value:
            if not identity.strip() or identity.count(":") > 1:
                raise ValueError(f"ignore entries must look like 'group:name', got {identity!r}")
        return value

    @field_validator("suggestion_bucket")
    @classmethod
    def _non_empty_bucket(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("suggestion_bucket must not be empty")
        return value

    def resolve_paths(self, base_dir: Path) -> CheckConfig:
        """Return a copy with relative paths anchored at *base_dir*."""
        return self.model_copy(
            update={
                "resolution": _anchor(self.resolution, base_dir),
                "compiled_outputs": tuple(_anchor(p, base_dir) for p in self.compiled_outputs),
            }
        )

    def with_overrides(self, **overrides: Any) -> CheckConfig:
        """Apply CLI overrides; ``None`` and empty values keep the file value."""
        update = {k: v for k, v in overrides.items() if v not in (None, (), [], frozenset())}
        if not update:
            return self
        try:
            return CheckConfig.model_validate({**self.model_dump(), **update})
        except ValidationError as e:
            raise ConfigError(f"invalid option: {e}") from e


def _anchor(path: Path, base_dir: Path) -> Path:
    return path if path.is_absolute() else base_dir / path


def parse_config(data: dict[str, Any], base_dir: Path) -> CheckConfig:
    try:
        config = CheckConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e
    return config.resolve_paths(base_dir)


def load_config(path: Path) -> CheckConfig:
    """Load ``implicit-deps.toml``; relative paths resolve against its directory."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"config file not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML in {path}: {e}") from e
    return parse_config(data, path.parent)
