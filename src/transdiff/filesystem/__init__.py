"""Language file discovery — patterns and filesystem walk."""

from transdiff.filesystem.collector import collect_files, walk_files
from transdiff.filesystem.pattern import (
    PREDEFINED_PATTERNS,
    NamedPattern,
    Pattern,
    PatternError,
    PatternRegistry,
    build_pattern_registry,
)

__all__ = [
    "NamedPattern",
    "PREDEFINED_PATTERNS",
    "Pattern",
    "PatternError",
    "PatternRegistry",
    "build_pattern_registry",
    "collect_files",
    "walk_files",
]
