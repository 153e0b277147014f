# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


class InstnothError(Exception):
    """Base class for every error raised by instnoth."""


@dataclass
class ParseError(InstnothError):
    """
    Fatal problem in one script: missing package name, or a top-level value
    (package/version/description/author/phase name) without a quote pair.
    """
    message: str
    source: Optional[Path] = None
    line_no: Optional[int] = None
    line: Optional[str] = None

    def __str__(self) -> str:
        where = str(self.source) if self.source else "<script>"
        if self.line_no is not None:
            where = f"{where}:{self.line_no}"
        out = f"{where}: {self.message}"
        if self.line:
            out += f"\n  {self.line}"
        return out


@dataclass
class CycleError(InstnothError):
    """Dependency resolution found `name` twice on the active path."""
    name: str
    chain: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        if self.chain:
            return f"Circular dependency detected: {' -> '.join([*self.chain, self.name])}"
        return f"Circular dependency detected: {self.name}"


@dataclass
class ScriptNotFoundError(InstnothError):
    """A script argument matched no file and no built-in script."""
    ref: str
    tried: list[Path] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Script not found: {self.ref}"


# ----------------------------------------------------------------------
# Recoverable problems (recorded, never raised)
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class UnrecognizedCommandWarning:
    """A command line the parser dropped (unknown word or missing value)."""
    line_no: int
    line: str

    def __str__(self) -> str:
        return f"line {self.line_no}: dropped {self.line!r}"


@dataclass(frozen=True)
class DependencyLoadWarning:
    """A dependency file could not be read or parsed; its edge was skipped."""
    ref: str
    path: Path
    reason: str
    required_by: str | None = None

    def __str__(self) -> str:
        who = f" (required by {self.required_by})" if self.required_by else ""
        return f"Could not load dependency {self.ref}{who}: {self.reason}"
