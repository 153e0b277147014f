# effects.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .commands import Command


class EffectKind(str, Enum):
    NARRATION = "narration"  # instant, presentational
    TIMED = "timed"          # has a nominal duration
    FACT = "fact"            # timed, values come from the FactProvider


@dataclass(frozen=True)
class Effect:
    """
    What one command "did".

    title    headline shown for the command ("" for silent commands like delay)
    tone     rendering hint: info | message | success | error | warning | progress
    details  extra lines (sub-steps, table rows)
    facts    (label, value) rows from a detection
    shell    shell commands the operation stands for (verbose mode only)
    status   short result word ("OK", "PASSED", "VALID"), if any
    result   logical outcome, identical in quick and normal mode
    """
    kind: EffectKind
    command: Command
    phase: str
    title: str
    tone: str = "info"
    details: Tuple[str, ...] = ()
    facts: Tuple[Tuple[str, str], ...] = ()
    shell: Tuple[str, ...] = ()
    status: Optional[str] = None
    duration_ms: int = 0
    elapsed_ms: int = 0
    result: Dict[str, Any] = field(default_factory=dict)
