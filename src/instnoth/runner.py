# runner.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from . import settings
from .dag import DependencyResolver, read_script
from .errors import DependencyLoadWarning, ScriptNotFoundError
from .facts import FactProvider, RandomFactProvider
from .interpreter import Interpreter
from .model import Program
from .parser import parse
from .timing import Clock
from .ui.console import Console, get_console

logger = logging.getLogger(__name__)

BUILTIN_DIR = Path(__file__).resolve().parent / "builtin"


@dataclass
class RunOptions:
    quick: bool = False
    verbose: bool = False
    skip_deps: bool = False
    seed: Optional[int] = None


@dataclass
class InstallPlan:
    """Root programs as given, and the order they will actually run in."""
    roots: List[Program]
    order: List[Program]
    base_dir: Path
    warnings: List[DependencyLoadWarning] = field(default_factory=list)


# ----------------------------------------------------------------------
# Locating scripts
# ----------------------------------------------------------------------

def list_builtins() -> List[str]:
    """Names of the scripts shipped with the package."""
    return sorted(p.name[: -len(settings.SCRIPT_SUFFIX)] for p in BUILTIN_DIR.glob(f"*{settings.SCRIPT_SUFFIX}"))


def discover_script(arg: Union[str, Path]) -> Path:
    """
    Resolve a script argument to a file.

    Tries, in order: the path as given, the path with the script suffix
    added, and (for bare names) the built-in script of that name.

    Raises:
        ScriptNotFoundError: nothing matched
    """
    path = Path(arg)
    tried = [path]
    if path.exists():
        return path

    if path.suffix != settings.SCRIPT_SUFFIX:
        with_suffix = Path(str(path) + settings.SCRIPT_SUFFIX)
        tried.append(with_suffix)
        if with_suffix.exists():
            return with_suffix

    if path.parent == Path("."):
        name = path.name if path.suffix == settings.SCRIPT_SUFFIX else path.name + settings.SCRIPT_SUFFIX
        builtin = BUILTIN_DIR / name
        tried.append(builtin)
        if builtin.exists():
            return builtin

    raise ScriptNotFoundError(str(arg), tried=tried)


def load_script(path: Union[str, Path]) -> Program:
    """Read and parse a root script. Unlike dependencies, failures here are fatal."""
    path = Path(path)
    program = parse(read_script(path), source=path)
    logger.debug("Loaded %s from %s", program.name, path)
    return program


# ----------------------------------------------------------------------
# Planning and running
# ----------------------------------------------------------------------

def plan(paths: Iterable[Union[str, Path]], skip_deps: bool = False, **resolver_kwargs) -> InstallPlan:
    """
    Load root scripts and linearize them with their dependencies.

    Relative dependency refs resolve against the first script's folder.
    With skip_deps the roots run exactly as given.

    Raises:
        OSError / ParseError: a root script could not be loaded
        CycleError: the dependency graph has a cycle
    """
    paths = [Path(p) for p in paths]
    roots = [load_script(p) for p in paths]
    resolver = DependencyResolver.for_files(paths, **resolver_kwargs)

    if skip_deps:
        return InstallPlan(roots=roots, order=list(roots), base_dir=resolver.base_dir)

    order = resolver.order(roots)
    logger.info("Install order: %s", ", ".join(p.name for p in order))
    return InstallPlan(roots=roots, order=order, base_dir=resolver.base_dir, warnings=list(resolver.warnings))


def make_interpreter(
    options: RunOptions,
    facts: Optional[FactProvider] = None,
    clock: Optional[Clock] = None,
) -> Interpreter:
    return Interpreter(
        facts if facts is not None else RandomFactProvider(options.seed),
        clock=clock,
        quick=options.quick,
        verbose=options.verbose,
    )


def run_plan(install_plan: InstallPlan, interpreter: Interpreter, console: Optional[Console] = None) -> Dict[str, str]:
    """
    Run every program of the plan in order, rendering effects as they happen.

    Returns:
        {program name: "installed"}
    """
    console = console or get_console()
    results: Dict[str, str] = {}

    if len(install_plan.order) > 1:
        console.print_plan(install_plan.order)

    for program in install_plan.order:
        console.print_program_header(program)
        interpreter.begin(program)
        for phase in program.phases:
            console.print_phase(phase.name)
            for effect in interpreter.stream_phase(phase):
                console.print_effect(effect)
        console.print_program_footer(program)
        results[program.name] = "installed"

    return results
