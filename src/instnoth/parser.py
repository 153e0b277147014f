# parser.py
"""
Line-oriented parser for .instnoth scripts.

    # comment
    package: "python"
    version: "3.12.1"
    depends: "base.instnoth", "toolchain.instnoth"

    phase "Download" {
        message "Fetching sources"
        download "https://example.org/python.tgz" size=2048
        bogus_word here        <- dropped silently
    }

Only two things are fatal: a missing package name and a top-level value
(including a phase name) without a quote pair. Everything else is recovered
by dropping the offending command line.
"""
from __future__ import annotations

import re
from dataclasses import fields
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .commands import ARGUMENT, PARAM, PRIMARY, VOCABULARY, Command
from .errors import ParseError, UnrecognizedCommandWarning
from .model import Phase, Program

HEADER_KEYS = ("package", "version", "description", "author")

_LEADING_DIGITS = re.compile(r"[0-9]+")


# ---------------------------------------------------------------------
# Value extraction helpers
# ---------------------------------------------------------------------

def extract_quoted(line: str) -> Optional[str]:
    """Substring between the first and second double quote, or None."""
    start = line.find('"')
    if start < 0:
        return None
    end = line.find('"', start + 1)
    if end < 0:
        return None
    return line[start + 1:end]


def parse_depends(text: str) -> List[str]:
    """
    Split the value of a `depends:` line into file references.

    Tokens must be quoted; commas and whitespace between them are ignored,
    as is any unquoted text. Empty tokens are dropped.
    """
    deps: List[str] = []
    current: List[str] = []
    in_quotes = False

    for ch in text:
        if ch == '"':
            if in_quotes:
                token = "".join(current).strip()
                if token:
                    deps.append(token)
                current = []
            in_quotes = not in_quotes
        elif in_quotes:
            current.append(ch)

    # unterminated last token
    token = "".join(current).strip()
    if token:
        deps.append(token)

    return deps


def string_param(args: str, key: str) -> Optional[str]:
    """Value of `key="value"` inside an argument string."""
    pattern = f'{key}="'
    pos = args.find(pattern)
    if pos < 0:
        return None
    rest = args[pos + len(pattern):]
    end = rest.find('"')
    if end < 0:
        return None
    return rest[:end]


def int_param(args: str, key: str) -> Optional[int]:
    """Value of `key=123`; digits only, stops at the first non-digit."""
    pattern = f"{key}="
    pos = args.find(pattern)
    if pos < 0:
        return None
    m = _LEADING_DIGITS.match(args, pos + len(pattern))
    return int(m.group()) if m else None


def bare_int(args: str, limit: Optional[int] = None) -> Optional[int]:
    """The whole argument string as a non-negative integer."""
    text = args.strip()
    if not _LEADING_DIGITS.fullmatch(text):
        return None
    value = int(text)
    if limit is not None and value > limit:
        return None
    return value


def build_command(line: str) -> Optional[Command]:
    """
    Turn one stripped command line into a Command.

    Returns None when the word is not in the vocabulary or a required
    quoted value is missing; numeric fields fall back to their defaults.
    """
    parts = line.split(None, 1)
    if not parts:
        return None
    word = parts[0]
    args = parts[1] if len(parts) > 1 else ""

    cls = VOCABULARY.get(word)
    if cls is None:
        return None

    values = {}
    for f in fields(cls):
        source = f.metadata.get("source")
        if source == PRIMARY:
            value = extract_quoted(line)
            if value is None:
                return None
            values[f.name] = value
        elif source == PARAM:
            key = f.metadata["key"]
            if isinstance(f.default, int):
                found: Union[int, str, None] = int_param(args, key)
            else:
                found = string_param(args, key)
            if found is not None:
                values[f.name] = found
        elif source == ARGUMENT:
            number = bare_int(args, f.metadata.get("limit"))
            if number is not None:
                values[f.name] = number

    return cls(**values)


# ---------------------------------------------------------------------
# Script parser
# ---------------------------------------------------------------------

class ScriptParser:
    """
    Parses one script's text into a Program.

    Dropped command lines are collected in `dropped` but never reported:
    callers that want them have to look.
    """

    def __init__(self, text: str, source: Union[str, Path, None] = None):
        self.lines = text.splitlines()
        self.source = Path(source) if source is not None else None
        self.dropped: List[UnrecognizedCommandWarning] = []

    def parse(self) -> Program:
        header = dict.fromkeys(HEADER_KEYS, "")
        depends: List[str] = []
        phases: List[Phase] = []

        i = 0
        while i < len(self.lines):
            line = self.lines[i].strip()

            if not line or line.startswith("#"):
                i += 1
                continue

            key = next((k for k in HEADER_KEYS if line.startswith(k + ":")), None)
            if key is not None:
                header[key] = self._quoted(line, i, f"{key} value")
            elif line.startswith("depends:"):
                depends = parse_depends(line[len("depends:"):])
            elif line.startswith("phase"):
                phase, i = self._parse_phase(i)
                phases.append(phase)

            i += 1

        if not header["package"]:
            raise ParseError("package name is missing", source=self.source)

        return Program(
            name=header["package"],
            version=header["version"],
            description=header["description"],
            author=header["author"],
            depends=tuple(depends),
            phases=tuple(phases),
            source=self.source,
        )

    def _quoted(self, line: str, index: int, what: str) -> str:
        value = extract_quoted(line)
        if value is None:
            raise ParseError(
                f"could not extract quoted {what}",
                source=self.source,
                line_no=index + 1,
                line=line,
            )
        return value

    def _parse_phase(self, i: int) -> Tuple[Phase, int]:
        """Parse a phase starting at line i; returns the phase and the index of its closing line."""
        line = self.lines[i].strip()
        name = self._quoted(line, i, "phase name")

        # opening brace may sit on a later line
        if "{" not in line:
            i += 1
            while i < len(self.lines) and "{" not in self.lines[i]:
                i += 1
        i += 1

        commands: List[Command] = []
        while i < len(self.lines):
            cmd_line = self.lines[i].strip()
            if cmd_line.startswith("}"):
                break
            if cmd_line and not cmd_line.startswith("#"):
                cmd = build_command(cmd_line)
                if cmd is None:
                    self.dropped.append(UnrecognizedCommandWarning(line_no=i + 1, line=cmd_line))
                else:
                    commands.append(cmd)
            i += 1

        return Phase(name=name, commands=tuple(commands)), i


def parse(text: str, source: Union[str, Path, None] = None) -> Program:
    """Parse script text into a Program, raising ParseError on fatal problems."""
    return ScriptParser(text, source=source).parse()
