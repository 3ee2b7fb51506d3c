"""Tests for loading resolution reports."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from implicit_deps.engine.models import ExternalArtifact, ModuleCoordinate, ProjectArtifact
from implicit_deps.engine.resolution import load_resolution, parse_resolution
from implicit_deps.exceptions import ResolutionError

REPORT = {
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
                        "artifacts": [{"classes": ["com.google.common.util.concurrent.internal.InternalFutures"]}],
                    }
                ],
            },
            {"project": ":lib", "module": "com.example:lib:unspecified", "artifacts": [{}]},
        ],
        "compileOnly": [
            {"module": "com.google.guava:guava:31.1-jre", "artifacts": [{"file": "jars/guava.jar"}]},
            {"module": "org.immutables:value:2.9.3", "artifacts": [{"classifier": "annotations"}]},
        ],
    },
}


def _parse(report=REPORT, base_dir=Path("/build")):
    return parse_resolution(json.dumps(report), base_dir)


class TestParseResolution:
    def test_metadata(self):
        resolution = _parse()
        assert resolution.project_path == ":app"
        assert resolution.build_file == "app/build.gradle"
        assert resolution.bucket_names == ["implementation", "compileOnly"]

    def test_first_level_of_one_bucket(self):
        declared = _parse().first_level(["implementation"])
        assert [d.identity for d in declared] == [
            "com.google.guava:guava:31.1-jre",
            "project :lib",
        ]

    def test_duplicates_across_buckets_kept_once(self):
        declared = _parse().first_level()
        assert [d.identity for d in declared] == [
            "com.google.guava:guava:31.1-jre",
            "project :lib",
            "org.immutables:value:2.9.3",
        ]

    def test_children_are_not_first_level(self):
        identities = {d.identity for d in _parse().first_level()}
        assert "com.google.guava:failureaccess:1.0.1" not in identities

    def test_artifact_kinds(self):
        declared = _parse().first_level()
        guava, lib, value = declared
        assert guava.module_artifacts() == {
            ExternalArtifact(ModuleCoordinate("com.google.guava", "guava", "31.1-jre"))
        }
        assert lib.module_artifacts() == {
            ProjectArtifact(":lib", ModuleCoordinate("com.example", "lib", "unspecified"))
        }
        (annotations,) = value.module_artifacts()
        assert annotations.classifier == "annotations"

    def test_relative_files_anchor_at_report_dir(self):
        guava = _parse().first_level()[0]
        assert guava.artifact_sources[0].file == Path("/build/jars/guava.jar")

    def test_project_without_module(self):
        report = {"configurations": {"api": [{"project": ":core:util", "artifacts": [{}]}]}}
        (dep,) = _parse(report).first_level()
        (artifact,) = dep.module_artifacts()
        assert artifact == ProjectArtifact(":core:util", ModuleCoordinate("", "util"))

    def test_unknown_bucket(self):
        with pytest.raises(ResolutionError, match="unknown dependency bucket"):
            _parse().first_level(["runtimeOnly"])

    def test_dependency_without_identity(self):
        with pytest.raises(ResolutionError):
            _parse({"configurations": {"api": [{"artifacts": []}]}})

    def test_bad_module_notation(self):
        with pytest.raises(ResolutionError):
            _parse({"configurations": {"api": [{"module": "a::b"}]}})

    def test_invalid_json(self):
        with pytest.raises(ResolutionError):
            parse_resolution("{not json", Path("."))


class TestLoadResolution:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "resolution.json"
        path.write_text(json.dumps(REPORT))
        resolution = load_resolution(path)
        guava = resolution.first_level()[0]
        assert guava.artifact_sources[0].file == tmp_path / "jars" / "guava.jar"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResolutionError, match="not found"):
            load_resolution(tmp_path / "missing.json")
