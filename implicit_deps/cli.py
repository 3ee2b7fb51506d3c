"""CLI entry point: implicit-deps.

Subcommands:
    implicit-deps create-config -o implicit-deps.toml   # Generate config template
    implicit-deps check                                 # Fail on implicit dependencies
    implicit-deps providers com.google.common.base.Joiner
    implicit-deps references                            # List referenced classes
"""

from __future__ import annotations

import sys
import zipfile
from pathlib import Path

import click

from implicit_deps.config import (
    CONFIG_TEMPLATE,
    DEFAULT_CONFIG_NAME,
    CheckConfig,
    load_config,
)
from implicit_deps.core.logging import setup_logging
from implicit_deps.engine.checker import ImplicitDependencyChecker
from implicit_deps.engine.references import referenced_classes
from implicit_deps.exceptions import ImplicitDependencyViolation, ImplicitDepsError

# Exit codes
EXIT_VIOLATION = 1
EXIT_ERROR = 2


def _build_config(
    config_file: str | None,
    resolution: str | None,
    **overrides,
) -> CheckConfig:
    """Merge the config file (explicit, or ./implicit-deps.toml if present) with CLI flags."""
    path = Path(config_file) if config_file else Path(DEFAULT_CONFIG_NAME)
    if config_file or path.is_file():
        config = load_config(path)
        return config.with_overrides(
            resolution=Path(resolution).resolve() if resolution else None, **overrides
        )
    if not resolution:
        raise click.UsageError(
            f"no {DEFAULT_CONFIG_NAME} found; pass --config or --resolution"
        )
    return CheckConfig(resolution=Path(resolution).resolve()).with_overrides(**overrides)


def _common_options(func):
    options = [
        click.option("-c", "--config", "config_file", default=None, help="Config file (TOML)"),
        click.option("--resolution", default=None, help="Resolution report (JSON)"),
        click.option("--project", default=None, help="Path of the project being checked, e.g. ':app'"),
        click.option("--bucket", "buckets", multiple=True, help="Dependency bucket counted as declared"),
        click.option(
            "--output",
            "outputs",
            multiple=True,
            type=click.Path(exists=True),
            help="Compiled-output reference listing (file or directory)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _overrides(project, buckets, outputs, **extra) -> dict:
    return {
        "project": project,
        "dependency_buckets": tuple(buckets) or None,
        "compiled_outputs": tuple(Path(o).resolve() for o in outputs),
        **extra,
    }


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """implicit-deps: require every used dependency to be declared explicitly."""
    setup_logging("DEBUG" if verbose else "WARNING")


@main.command("create-config")
@click.option("-o", "--output", default=DEFAULT_CONFIG_NAME, help="Output file path")
def create_config(output: str) -> None:
    """Generate a configuration template."""
    Path(output).write_text(CONFIG_TEMPLATE)
    click.echo(f"Config template written to {output}")
    click.echo("Edit the file, then run: implicit-deps check -c " + output)


@main.command("check")
@_common_options
@click.option("--build-file", default=None, help="Build file named in the report")
@click.option("--ignore", "ignored", multiple=True, help="Module to ignore (group:name)")
@click.option("--suggest-into", default=None, help="Bucket used in suggested declarations")
def check_command(
    config_file: str | None,
    resolution: str | None,
    project: str | None,
    buckets: tuple[str, ...],
    outputs: tuple[str, ...],
    build_file: str | None,
    ignored: tuple[str, ...],
    suggest_into: str | None,
) -> None:
    """Fail if compiled code uses classes from undeclared dependencies."""
    try:
        config = _build_config(
            config_file,
            resolution,
            **_overrides(
                project,
                buckets,
                outputs,
                build_file=build_file,
                suggestion_bucket=suggest_into,
            ),
        )
        if ignored:
            config = config.with_overrides(ignore=config.ignore | frozenset(ignored))
        ImplicitDependencyChecker(config).run()
    except ImplicitDependencyViolation as e:
        click.echo(str(e), err=True)
        sys.exit(EXIT_VIOLATION)
    except (ImplicitDepsError, OSError, zipfile.BadZipFile) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


@main.command("providers")
@_common_options
@click.argument("class_name")
def providers(
    config_file: str | None,
    resolution: str | None,
    project: str | None,
    buckets: tuple[str, ...],
    outputs: tuple[str, ...],
    class_name: str,
) -> None:
    """Show which resolved artifacts provide CLASS_NAME."""
    try:
        config = _build_config(config_file, resolution, **_overrides(project, buckets, outputs))
        _, declared, index = ImplicitDependencyChecker(config).load()
    except (ImplicitDepsError, OSError, zipfile.BadZipFile) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    candidates = index.classes_to_artifacts(class_name)
    if not candidates:
        click.echo(f"No resolved artifact provides {class_name}")
        return
    declared_set = {a for d in declared for a in d.module_artifacts()}
    for artifact in candidates:
        marker = "declared" if artifact in declared_set else "transitive"
        click.echo(f"  {artifact.display_name}  ({marker})")


@main.command("references")
@_common_options
def references(
    config_file: str | None,
    resolution: str | None,
    project: str | None,
    buckets: tuple[str, ...],
    outputs: tuple[str, ...],
) -> None:
    """List the classes referenced by the compiled output."""
    try:
        config = _build_config(config_file, resolution, **_overrides(project, buckets, outputs))
        classes = referenced_classes(config.compiled_outputs)
    except (ImplicitDepsError, OSError, zipfile.BadZipFile) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    for class_name in sorted(classes):
        click.echo(class_name)


if __name__ == "__main__":
    main()
