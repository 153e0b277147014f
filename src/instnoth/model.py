# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from .commands import Command


@dataclass(frozen=True)
class Phase:
    """A named, ordered group of commands inside a script."""
    name: str
    commands: Tuple[Command, ...] = ()


@dataclass(frozen=True)
class Program:
    """
    One parsed script: metadata + dependency refs + phases.

    `depends` holds file references exactly as declared; they are resolved
    against the run-wide base directory by the resolver, not here.
    """
    name: str
    version: str = ""
    description: str = ""
    author: str = ""
    depends: Tuple[str, ...] = ()
    phases: Tuple[Phase, ...] = ()

    # where the script was read from (None for in-memory text)
    source: Optional[Path] = field(default=None, compare=False)

    @property
    def command_count(self) -> int:
        return sum(len(p.commands) for p in self.phases)
