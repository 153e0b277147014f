"""Console output formatting utilities for instnoth."""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional

import click

from .. import settings
from ..dag import DependencyNode, walk_tree
from ..effects import Effect, EffectKind
from ..model import Program

TONE_MARKS = {
    "success": ("✓", "green"),
    "error": ("✗", "red"),
    "warning": ("!", "yellow"),
    "message": ("»", "cyan"),
}


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, color: Optional[bool] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            color: Force styling on/off; None lets click decide per stream
        """
        self.debug = debug
        self.color = color

    def _out(self, message: str = "", err: bool = False) -> None:
        click.echo(message, err=err, color=self.color)

    def print_header(self, title: str) -> None:
        """Print a section header."""
        self._out(f"\n{click.style(title, bold=True)}")
        self._out("-" * len(title))

    def print_plan(self, programs: List[Program]) -> None:
        """Print the numbered install order."""
        self.print_header("INSTALL PLAN")
        for i, program in enumerate(programs, 1):
            version = f" v{program.version}" if program.version else ""
            self._out(f"  {i}. {program.name}{version}")
        self._out()

    def print_program_header(self, program: Program) -> None:
        """Print program metadata before its phases."""
        version = f" v{program.version}" if program.version else ""
        self._out("\n" + "=" * 60)
        self._out(click.style(f"  {program.name}{version}", bold=True))
        if program.description:
            self._out(f"  {program.description}")
        if program.author:
            self._out(f"  Author: {program.author}")
        if program.depends:
            self._out(f"  Depends: {', '.join(program.depends)}")
        self._out("=" * 60)

    def print_program_footer(self, program: Program) -> None:
        """Print the success line after a program's phases."""
        self._out(click.style(f"\n✓ {program.name} installed successfully", fg="green", bold=True))

    def print_phase(self, name: str) -> None:
        """Print phase start message."""
        self._out(click.style(f"\n▶ {name}", fg="blue", bold=True))

    def progress_bar(self, percent: int) -> str:
        """Static text bar, e.g. [##########----------]  50%."""
        width = max(settings.PROGRESS_WIDTH, 1)
        filled = width * percent // 100
        return f"[{'#' * filled}{'-' * (width - filled)}] {percent:3d}%"

    def print_effect(self, effect: Effect) -> None:
        """Render one effect; silent effects (empty title) print nothing."""
        if effect.kind is EffectKind.NARRATION:
            if effect.tone == "progress":
                self._out(f"  {self.progress_bar(effect.result.get('progress', 0))}")
                return
            mark, colour = TONE_MARKS.get(effect.tone, ("", None))
            text = f"{mark} {effect.title}" if mark else effect.title
            self._out("  " + click.style(text, fg=colour))
            return

        if not effect.title:
            return

        line = f"  → {effect.title}"
        if effect.status:
            line += " ... " + click.style(effect.status, fg="green")
        self._out(line)

        for cmd in effect.shell:
            self._out(click.style(f"      $ {cmd}", dim=True))
        if effect.facts:
            width = max(len(label) for label, _ in effect.facts)
            for label, value in effect.facts:
                self._out(f"      {label + ':':<{width + 1}} {value}")
        for detail in effect.details:
            self._out(f"      {detail}")

    def print_dependency_tree(self, trees: Iterable[DependencyNode]) -> None:
        """Print declared dependencies, one program per line."""
        for depth, node in walk_tree(trees):
            indent = "  " * depth
            if node.missing:
                self._out(f"{indent}{node.ref} " + click.style("(missing)", fg="red"))
                continue
            program = node.program
            label = program.name if program is not None else str(node.ref)
            if program is not None and program.version:
                label += f" v{program.version}"
            if node.repeated:
                label += click.style(" (see above)", dim=True)
            self._out(f"{indent}{label}")

    def print_builtins(self, entries: Iterable[tuple[str, str]]) -> None:
        """Print built-in script names with their descriptions."""
        self.print_header("BUILT-IN SCRIPTS")
        for name, description in entries:
            self._out(f"  {name:<12} {description}")

    def print_results(self, results: dict[str, str], elapsed_ms: int = 0) -> None:
        """Print final results summary."""
        self._out("\n" + "=" * 40)
        self._out("RESULTS")
        self._out("=" * 40)
        for name, status in results.items():
            self._out(f"  {name}: {status.upper()}")
        if elapsed_ms:
            self._out(f"  Simulated time: {elapsed_ms / 1000:.1f}s")

    def print_warning(self, message: str) -> None:
        """Print a non-fatal problem to stderr."""
        self._out(click.style(f"WARNING: {message}", fg="yellow"), err=True)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        self._out(click.style(f"\nERROR: {title}", fg="red", bold=True), err=True)
        self._out(message, err=True)
        if details:
            for detail in details:
                self._out(f"  {detail}", err=True)
        if suggestion:
            self._out(f"\n{suggestion}", err=True)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        else:
            self._out(f"Error: {exc}", err=True)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._out(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            self._out(f"[DEBUG] {message}", err=True)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
