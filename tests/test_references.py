"""Tests for class-reference extraction from compiled-output listings."""

from __future__ import annotations

import pytest

from implicit_deps.engine.extractors.jdeps import JdepsExtractor
from implicit_deps.engine.extractors.listing import ClassListingExtractor, normalize_class_name
from implicit_deps.engine.extractors.registry import (
    EXTRACTOR_REGISTRY,
    discover_listings,
    extractor_for,
)
from implicit_deps.engine.references import extract, referenced_classes
from implicit_deps.exceptions import ReferenceExtractionError

JDEPS_OUTPUT = """\
app.jar -> java.base
app.jar -> guava-31.1-jre.jar
   com.example.App                                    (app.jar)
      -> com.example.Helper                           app.jar
      -> com.google.common.collect.ImmutableList      guava-31.1-jre.jar
      -> java.lang.Object                             java.base
   com.example.Helper                                 (app.jar)
      -> java.lang.String                             java.base
      -> org.missing.Gone                             not found
"""

JDEPS_OUTPUT_ONE_EDGE_PER_LINE = """\
app.jar -> java.base
app.jar -> guava-31.1-jre.jar
   com.example.App                                    -> com.example.Helper                           app.jar
   com.example.App                                    -> com.google.common.collect.ImmutableList      guava-31.1-jre.jar
   com.example.App                                    -> java.lang.Object                             java.base
   com.example.Helper                                 -> java.lang.String                             java.base
   com.example.Helper                                 -> org.missing.Gone                             not found
"""


# ── registry ─────────────────────────────────────────────────────────────


class TestRegistry:
    def test_all_extractors_registered(self):
        assert {"listing", "jdeps"}.issubset(EXTRACTOR_REGISTRY)

    def test_extractor_for_patterns(self, tmp_path):
        assert extractor_for(tmp_path / "main.jdeps").detection_method == "jdeps"
        assert extractor_for(tmp_path / "main.classes").detection_method == "listing"
        assert extractor_for(tmp_path / "main.refs").detection_method == "listing"
        assert extractor_for(tmp_path / "Main.class") is None

    def test_discover_listings_recurses(self, tmp_path):
        (tmp_path / "main").mkdir()
        (tmp_path / "main" / "app.jdeps").write_text("")
        (tmp_path / "extra.classes").write_text("")
        (tmp_path / "README").write_text("")
        found = sorted((e.detection_method, p.name) for e, p in discover_listings(tmp_path))
        assert found == [("jdeps", "app.jdeps"), ("listing", "extra.classes")]


# ── ClassListingExtractor ────────────────────────────────────────────────


class TestClassListingExtractor:
    @pytest.fixture
    def extractor(self):
        return ClassListingExtractor()

    def test_dotted_names(self, extractor, tmp_path):
        f = tmp_path / "main.classes"
        f.write_text("com.foo.Bar\ncom.baz.Qux\n")
        assert extractor.extract(f, f.read_text()) == {"com.foo.Bar", "com.baz.Qux"}

    def test_skips_comments_and_blanks(self, extractor, tmp_path):
        f = tmp_path / "main.classes"
        f.write_text("# header\n\ncom.foo.Bar  # used by App\n   \n")
        assert extractor.extract(f, f.read_text()) == {"com.foo.Bar"}

    def test_duplicates_collapse(self, extractor, tmp_path):
        f = tmp_path / "main.classes"
        f.write_text("com.foo.Bar\ncom/foo/Bar\ncom/foo/Bar.class\n")
        assert extractor.extract(f, f.read_text()) == {"com.foo.Bar"}

    def test_normalize_class_name(self):
        assert normalize_class_name(" com/foo/Bar$Inner.class ") == "com.foo.Bar$Inner"


# ── JdepsExtractor ───────────────────────────────────────────────────────


class TestJdepsExtractor:
    def test_targets_of_arrows(self, tmp_path):
        f = tmp_path / "main.jdeps"
        f.write_text(JDEPS_OUTPUT)
        assert JdepsExtractor().extract(f, JDEPS_OUTPUT) == {
            "com.example.Helper",
            "com.google.common.collect.ImmutableList",
            "java.lang.Object",
            "java.lang.String",
            "org.missing.Gone",
        }

    def test_one_edge_per_line_layout(self, tmp_path):
        content = JDEPS_OUTPUT_ONE_EDGE_PER_LINE
        assert JdepsExtractor().extract(tmp_path / "main.jdeps", content) == {
            "com.example.Helper",
            "com.google.common.collect.ImmutableList",
            "java.lang.Object",
            "java.lang.String",
            "org.missing.Gone",
        }

    def test_both_layouts_agree(self, tmp_path):
        f = tmp_path / "main.jdeps"
        extractor = JdepsExtractor()
        assert extractor.extract(f, JDEPS_OUTPUT) == extractor.extract(f, JDEPS_OUTPUT_ONE_EDGE_PER_LINE)

    def test_archive_summary_lines_ignored(self, tmp_path):
        content = "app.jar -> guava-31.1-jre.jar\n"
        assert JdepsExtractor().extract(tmp_path / "x.jdeps", content) == set()


# ── extract / referenced_classes ─────────────────────────────────────────


class TestReferencedClasses:
    def test_union_across_locations(self, tmp_path):
        a = tmp_path / "a.classes"
        a.write_text("com.foo.Bar\n")
        b_dir = tmp_path / "test-output"
        b_dir.mkdir()
        (b_dir / "test.jdeps").write_text("   x.Test (t.jar)\n      -> com.baz.Qux   baz.jar\n")
        assert referenced_classes([a, b_dir]) == {"com.foo.Bar", "com.baz.Qux"}

    def test_empty_directory(self, tmp_path):
        assert extract(tmp_path) == set()

    def test_unrecognised_file_raises(self, tmp_path):
        f = tmp_path / "Main.class"
        f.write_bytes(b"\xca\xfe\xba\xbe")
        with pytest.raises(ReferenceExtractionError):
            extract(f)

    def test_missing_file_propagates(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            extract(tmp_path / "missing.classes")

    def test_no_locations(self):
        assert referenced_classes([]) == set()
