"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class LanguagesConfig:
    base: Optional[str] = None  # defaults to the first of langs
    langs: List[str] = field(default_factory=list)

    @property
    def base_lang(self) -> Optional[str]:
        if self.base:
            return self.base
        return self.langs[0] if self.langs else None


@dataclass
class DiscoveryConfig:
    glob: str = "SUB"  # predefined pattern name or raw pattern
    extensions: List[str] = field(default_factory=list)  # empty = any


@dataclass
class GitConfig:
    enabled: bool = True
    from_revision: Optional[str] = None  # None = HEAD
    to_revision: Optional[str] = None  # None = working copy


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    absolute_paths: bool = False
    show_diff: bool = False
    show_summary: bool = True


@dataclass
class CheckConfig:
    fail_on_diffs: bool = False  # exit 1 when anything is reported


@dataclass
class TransdiffConfig:
    version: str = "1.0"
    languages: LanguagesConfig = field(default_factory=LanguagesConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    git: GitConfig = field(default_factory=GitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
