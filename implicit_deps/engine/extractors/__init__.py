"""Class-reference extractors — auto-registered on import."""

from implicit_deps.engine.extractors import (
    jdeps,  # noqa: F401
    listing,  # noqa: F401
)
