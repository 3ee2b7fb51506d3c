"""Shared pytest fixtures for implicit-deps tests."""

from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest


@pytest.fixture
def make_jar(tmp_path: Path):
    """Write a jar whose directory holds the given entries."""

    def _make(name: str, entries: list[str]) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as jar:
            for entry in entries:
                jar.writestr(entry, b"")
        return path

    return _make


@pytest.fixture
def project_dir(tmp_path: Path, make_jar) -> Path:
    """A checked project: resolution report, dependency jars and a jdeps listing.

    ``:app`` declares guava and ``:lib``; guava pulls in failureaccess
    transitively. The compiled output uses guava, failureaccess and its own
    classes.
    """
    make_jar("jars/guava.jar", ["com/google/common/base/Joiner.class"])
    make_jar(
        "jars/failureaccess.jar",
        ["com/google/common/util/concurrent/internal/InternalFutures.class"],
    )
    report = {
        "project": ":app",
        "build_file": "app/build.gradle",
        "configurations": {
            "implementation": [
                {
                    "module": "com.google.guava:guava:31.1-jre",
                    "artifacts": [{"file": "jars/guava.jar"}],
                    "dependencies": [
                        {
                            "module": "com.google.guava:failureaccess:1.0.1",
                            "artifacts": [{"file": "jars/failureaccess.jar"}],
                        }
                    ],
                },
                {
                    "project": ":lib",
                    "module": "com.example:lib:unspecified",
                    "artifacts": [{"classes": ["com.example.lib.Util"]}],
                    "dependencies": [
                        {
                            "project": ":app",
                            "module": "com.example:app:unspecified",
                            "artifacts": [{"classes": ["com.example.app.Main"]}],
                        }
                    ],
                },
            ],
        },
    }
    (tmp_path / "resolution.json").write_text(json.dumps(report))
    (tmp_path / "main.jdeps").write_text(
        "app.jar -> java.base\n"
        "   com.example.app.Main -> com.example.app.Main                         app.jar\n"
        "   com.example.app.Main -> com.example.lib.Util                         lib.jar\n"
        "   com.example.app.Main -> com.google.common.base.Joiner                guava.jar\n"
        "   com.example.app.Main -> com.google.common.util.concurrent.internal.InternalFutures  failureaccess.jar\n"
        "   com.example.app.Main -> java.lang.Object                             java.base\n"
    )
    (tmp_path / "implicit-deps.toml").write_text(
        'resolution = "resolution.json"\ncompiled_outputs = ["main.jdeps"]\n'
    )
    return tmp_path
