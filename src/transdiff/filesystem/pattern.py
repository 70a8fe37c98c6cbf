"""Glob-like patterns identifying language files.

Placeholders:

* ``%l`` — language code (required)
* ``%e`` — file extensions, ``{md,rst}`` or ``*`` when none are given

Wildcards: ``**`` matches anything including ``/``, ``*`` anything except
``/``, ``?`` one character except ``/``, ``{a,b}`` any alternative,
``[abc]`` / ``[!abc]`` character classes (as in :mod:`fnmatch`) and ``\\x``
a literal ``x``.
Patterns match ``/``-separated paths relative to the audited root.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

LANG_PLACEHOLDER = "%l"
EXT_PLACEHOLDER = "%e"

CUSTOM_PATTERNS_FILE = ".transdiff-patterns.yaml"


class PatternError(ValueError):
    """Raised on invalid patterns or pattern files."""


@dataclass(frozen=True)
class NamedPattern:
    name: str
    pattern: str
    description: str = ""


PREDEFINED_PATTERNS: List[NamedPattern] = [
    NamedPattern("SUB", "%l/**.%e", "each language in separate subdirectory"),
    NamedPattern("EXT", "**.%l.%e", "language code as part of file extension"),
]


def _char_class(glob: str, start: int) -> Tuple[str, int]:
    """Translate the ``[...]`` class at *start*; returns (regex, next index).

    Follows ``fnmatch.translate``: ``[!...]`` negates, a leading ``]`` is
    literal, and an unclosed ``[`` is matched literally. Negated classes
    never match ``/``.
    """
    j = start + 1
    if j < len(glob) and glob[j] == "!":
        j += 1
    if j < len(glob) and glob[j] == "]":
        j += 1
    j = glob.find("]", j)
    if j == -1:
        return re.escape("["), start + 1

    body = glob[start + 1:j].replace("\\", "\\\\")
    if body.startswith("!"):
        body = "^/" + body[1:]
    elif body.startswith(("^", "[")):
        body = "\\" + body
    return f"[{body}]", j + 1


def _translate(glob: str, lang: str) -> str:
    """Translate a glob with ``%l`` to a regular expression body."""
    out: List[str] = []
    i = 0
    n = len(glob)
    while i < n:
        if glob.startswith(LANG_PLACEHOLDER, i):
            out.append(re.escape(lang))
            i += 2
        elif glob.startswith("**", i):
            out.append(".*")
            i += 2
        elif glob[i] == "*":
            out.append("[^/]*")
            i += 1
        elif glob[i] == "?":
            out.append("[^/]")
            i += 1
        elif glob[i] == "{":
            end = glob.find("}", i)
            if end == -1:
                raise PatternError(f"Unclosed '{{' in pattern: {glob}")
            options = glob[i + 1:end].split(",")
            out.append("(?:" + "|".join(_translate(o, lang) for o in options) + ")")
            i = end + 1
        elif glob[i] == "[":
            cls, i = _char_class(glob, i)
            out.append(cls)
        elif glob[i] == "\\" and i + 1 < n:
            out.append(re.escape(glob[i + 1]))
            i += 2
        else:
            out.append(re.escape(glob[i]))
            i += 1
    return "".join(out)


@dataclass
class Pattern:
    """A parsed pattern, still holding the ``%l`` placeholder."""

    raw: str

    _compiled: Dict[str, re.Pattern[str]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def compile(self, lang: str) -> re.Pattern[str]:
        """Return the matcher for *lang* (cached per language)."""
        if lang not in self._compiled:
            self._compiled[lang] = re.compile(_translate(self.raw, lang) + r"\Z")
        return self._compiled[lang]

    def matches(self, rel_path: str, lang: str) -> bool:
        return self.compile(lang).match(rel_path) is not None

    def __str__(self) -> str:
        return self.raw


class PatternRegistry:
    """Named patterns: the predefined ones plus custom ones from YAML."""

    def __init__(self) -> None:
        self._patterns: Dict[str, NamedPattern] = {}

    def register(self, pattern: NamedPattern) -> None:
        self._patterns[pattern.name] = pattern

    def register_many(self, patterns: List[NamedPattern]) -> None:
        for p in patterns:
            self.register(p)

    @property
    def all_patterns(self) -> List[NamedPattern]:
        return list(self._patterns.values())

    def get(self, name: str) -> Optional[NamedPattern]:
        return self._patterns.get(name)

    def parse(self, raw_pattern: str, extensions: Optional[List[str]] = None) -> Pattern:
        """Resolve a pattern name or raw glob and substitute extensions.

        ``parse("%l/**.%e", ["md", "rst"])`` gives ``%l/**.{md,rst}``.
        """
        named = self._patterns.get(raw_pattern)
        pattern = named.pattern if named is not None else raw_pattern

        if LANG_PLACEHOLDER not in pattern:
            raise PatternError(
                f"Pattern must contain placeholder for language code '{LANG_PLACEHOLDER}': {pattern}"
            )

        exts = [e.strip().lstrip(".") for e in (extensions or []) if e.strip()]
        ext_pattern = "{" + ",".join(exts) + "}" if exts else "*"
        return Pattern(pattern.replace(EXT_PLACEHOLDER, ext_pattern))

    def load_custom_patterns(self, path: Path) -> int:
        """Load named patterns from a YAML file. Returns count loaded."""
        if not path.is_file():
            return 0
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise PatternError(f"Failed to parse {path}: {exc}") from exc

        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]

        count = 0
        for entry in data:
            if not isinstance(entry, dict) or "name" not in entry or "pattern" not in entry:
                raise PatternError(f"Invalid pattern entry in {path}: {entry!r}")
            if LANG_PLACEHOLDER not in str(entry["pattern"]):
                raise PatternError(
                    f"Pattern '{entry['name']}' in {path} has no '{LANG_PLACEHOLDER}' placeholder"
                )
            self.register(
                NamedPattern(
                    name=str(entry["name"]),
                    pattern=str(entry["pattern"]),
                    description=str(entry.get("description", "")),
                )
            )
            count += 1
        return count


def build_pattern_registry(root: Optional[Path] = None) -> PatternRegistry:
    """Create a registry with predefined patterns and *root*'s custom ones."""
    registry = PatternRegistry()
    registry.register_many(PREDEFINED_PATTERNS)
    if root is not None:
        registry.load_custom_patterns(root / CUSTOM_PATTERNS_FILE)
    return registry
