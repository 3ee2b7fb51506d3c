"""Extractor for ``jdeps -verbose:class`` output.

Only dependency lines are read; the target class is the first token after
the arrow. Older JDKs group the edges under their source class:

   com.example.App (app.jar)
      -> com.google.common.collect.ImmutableList   guava-31.1-jre.jar
      -> java.lang.Object                           java.base

while JDK 9 and later print one edge per line:

   com.example.App -> com.google.common.collect.ImmutableList   guava-31.1-jre.jar
   com.example.App -> java.lang.Object                           java.base

Archive summary lines (``app.jar -> guava.jar``) have no leading whitespace
and are skipped.
"""

from __future__ import annotations

import re
from pathlib import Path

from implicit_deps.engine.extractors.registry import register_extractor

_DEP_RE = re.compile(r"^\s+(?:\S+\s+)?->\s+([A-Za-z_$][\w$.]*)")


class JdepsExtractor:
    detection_method = "jdeps"
    file_patterns = ["*.jdeps"]

    def extract(self, file_path: Path, content: str) -> set[str]:
        classes: set[str] = set()
        for line in content.splitlines():
            m = _DEP_RE.match(line)
            if m:
                classes.add(m.group(1))
        return classes


register_extractor(JdepsExtractor())
