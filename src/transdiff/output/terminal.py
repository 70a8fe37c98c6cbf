"""Rich terminal reporter — one line per difference, optional patches."""

from __future__ import annotations

import os
from typing import Optional

from rich.console import Console
from rich.text import Text

from transdiff.audit.models import AuditReport
from transdiff.core.changes import ContentError
from transdiff.core.diffs import Missing, ModifiedBase, ModifiedBoth, Patch
from transdiff.core.files import LanguageFile

_NO_CONTENT = "<no content>"


def display_path(file: Optional[LanguageFile], root: str, absolute: bool = False) -> str:
    """Path of *file* relative to *root* unless *absolute* (or not relative-able)."""
    if file is None:
        return "-"
    if absolute or not root:
        return file.path
    try:
        return os.path.relpath(file.path, root)
    except ValueError:
        return file.path


class TerminalRenderer:
    def __init__(
        self,
        *,
        absolute_paths: bool = False,
        show_diff: bool = False,
        console: Optional[Console] = None,
    ) -> None:
        self.absolute_paths = absolute_paths
        self.show_diff = show_diff
        self.console = console or Console(highlight=False, soft_wrap=True)

    def _path(self, file: Optional[LanguageFile], root: str) -> str:
        return display_path(file, root, self.absolute_paths)

    def render_diffs(self, report: AuditReport) -> None:
        root = report.root
        for diff in report.diffs:
            if isinstance(diff, Missing):
                self._line(f"{diff.lang}: missing translation of: {self._path(diff.base, root)}", "yellow")
            elif isinstance(diff, ModifiedBase):
                self._line(
                    f"{diff.lang}: modified only base: "
                    f"{self._path(diff.base, root)}: {self._path(diff.translation, root)}",
                    "red",
                )
                self._patch(diff.base, diff.base_patch, root)
            elif isinstance(diff, ModifiedBoth):
                self._line(
                    f"{diff.lang}: modified base and translation: "
                    f"{self._path(diff.base, root)}: {self._path(diff.translation, root)}",
                    "cyan",
                )
                self._patch(diff.base, diff.base_patch, root)
                self._patch(diff.translation, diff.translation_patch, root)
            else:
                self._line(
                    f"{getattr(diff, 'lang', '?')}: unknown difference: "
                    f"{self._path(getattr(diff, 'base', None), root)}: "
                    f"{self._path(getattr(diff, 'translation', None), root)}",
                    "magenta",
                )

    def _line(self, message: str, style: str) -> None:
        self.console.print(Text(message, style=style))

    def _patch(self, file: LanguageFile, patch: Patch, root: str) -> None:
        if not self.show_diff:
            return
        try:
            text = patch.text or _NO_CONTENT
        except ContentError as exc:
            text = f"<unreadable: {exc}>"
        self.console.print(Text(f"diff {self._path(file, root)}", style="bold"))
        for line in text.splitlines():
            style = ""
            if line.startswith("@@"):
                style = "cyan"
            elif line.startswith("+"):
                style = "green"
            elif line.startswith("-"):
                style = "red"
            self.console.print(Text(line, style=style))


def render(
    report: AuditReport,
    *,
    absolute_paths: bool = False,
    show_diff: bool = False,
    show_summary: bool = True,
) -> None:
    """Print differences to stdout; summary and skipped pairs to stderr."""
    TerminalRenderer(absolute_paths=absolute_paths, show_diff=show_diff).render_diffs(report)

    err = Console(stderr=True, highlight=False, soft_wrap=True)
    if report.unclassifiable:
        err.print()
        err.print(f"[bold yellow]⚠  {len(report.unclassifiable)} pair(s) could not be compared:[/bold yellow]")
        for item in report.unclassifiable:
            err.print(
                Text(
                    f"  {item.lang}: {display_path(item.base, report.root, absolute_paths)}: "
                    f"{item.reason}"
                )
            )

    if show_summary:
        _print_summary(err, report)


def _print_summary(console: Console, report: AuditReport) -> None:
    console.print()
    files = ", ".join(f"{lang}={n}" for lang, n in report.files_by_lang.items())
    console.print(f"[dim]Files:[/dim]          {files}")
    console.print(f"[dim]Missing:[/dim]        {len(report.missing)}")
    console.print(f"[dim]Modified:[/dim]       {len(report.modified)}")
    console.print(f"[dim]Unclassifiable:[/dim] {len(report.unclassifiable)}")
    if report.git_available:
        console.print(f"[dim]Range:[/dim]          {report.revision_range}")
    else:
        console.print("[dim]Range:[/dim]          - (git not used)")
    console.print(f"[dim]Duration:[/dim]       {report.duration_ms:.0f}ms")

    console.print()
    if not report.has_problems:
        console.print("[bold green]✅ All translations present and in sync.[/bold green]")
