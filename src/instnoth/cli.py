# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from instnoth import settings
from instnoth.dag import DependencyResolver, dependency_tree
from instnoth.errors import CycleError, ParseError, ScriptNotFoundError
from instnoth.logging_utils import configure_logging
from instnoth.runner import (
    BUILTIN_DIR,
    RunOptions,
    discover_script,
    list_builtins,
    load_script,
    make_interpreter,
    plan,
    run_plan,
)
from instnoth.ui.console import Console, get_console, set_console


def resolve_scripts(args: tuple[str, ...]) -> list[Path]:
    """
    Resolve every script argument, or exit with a helpful message.

    Raises:
        SystemExit: If a script cannot be found
    """
    console = get_console()
    paths = []
    for arg in args:
        try:
            paths.append(discover_script(arg))
        except ScriptNotFoundError as e:
            console.print_error(
                "Script not found",
                f"Could not find script: {arg}",
                details=[f"Tried: {p}" for p in e.tried],
                suggestion="Pass a path to a script, or one of the built-ins:\n  " + ", ".join(list_builtins()),
            )
            sys.exit(1)
    return paths


def fail(ctx: click.Context, exc: BaseException) -> None:
    """Report a fatal error the way its type deserves, then exit 1."""
    console = get_console()
    if isinstance(exc, CycleError):
        console.print_error(
            "Circular dependency",
            str(exc),
            suggestion="Remove one of the depends: entries on the cycle, or run with --skip-deps.",
        )
    elif isinstance(exc, ParseError):
        console.print_error("Invalid script", str(exc))
    elif isinstance(exc, OSError):
        console.print_error("Could not read script", str(exc))
    else:
        console.print_exception(exc)
        sys.exit(1)
    if ctx.obj.get("debug", False):
        console.print_exception(exc)
    sys.exit(1)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    envvar="INSTNOTH_DEBUG",
    help="Enable debug mode (show stack traces and debug logging)",
)
@click.pass_context
def cli(ctx, debug):
    """instnoth: run installer scripts that only pretend to install."""
    configure_logging(debug=debug)
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.argument("scripts", nargs=-1, required=True)
@click.option("--quick", is_flag=True, default=False, envvar="INSTNOTH_QUICK", help="Skip all delays")
@click.option(
    "--verbose", "-v", is_flag=True, default=False, envvar="INSTNOTH_VERBOSE", help="Show the shell commands being simulated"
)
@click.option("--skip-deps", is_flag=True, default=False, help="Run the given scripts without resolving dependencies")
@click.option("--seed", type=int, default=None, envvar="INSTNOTH_SEED", help="Seed for reproducible hardware facts")
@click.pass_context
def run(ctx, scripts, quick, verbose, skip_deps, seed):
    """Run one or more installer scripts (paths or built-in names)."""
    console = get_console()
    options = RunOptions(quick=quick, verbose=verbose, skip_deps=skip_deps, seed=seed)
    paths = resolve_scripts(scripts)

    try:
        install_plan = plan(
            paths,
            skip_deps=options.skip_deps,
            on_warning=lambda w: console.print_warning(str(w)),
        )
        console.print_debug(f"Base directory: {install_plan.base_dir}")
        console.print_debug("Run order: " + " -> ".join(p.name for p in install_plan.order))
        interpreter = make_interpreter(options)
        results = run_plan(install_plan, interpreter, console)
        console.print_results(results, elapsed_ms=interpreter.elapsed_ms)

    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        fail(ctx, e)


@cli.command()
@click.argument("scripts", nargs=-1, required=True)
@click.pass_context
def deps(ctx, scripts):
    """Show the dependency tree of one or more scripts."""
    console = get_console()
    paths = resolve_scripts(scripts)

    try:
        roots = [load_script(p) for p in paths]
        resolver = DependencyResolver.for_files(paths)
        console.print_dependency_tree(dependency_tree(roots, resolver))
    except Exception as e:
        fail(ctx, e)


@cli.command()
@click.pass_context
def builtins(ctx):
    """List the scripts that ship with instnoth."""
    console = get_console()
    entries = []
    for name in list_builtins():
        try:
            program = load_script(BUILTIN_DIR / f"{name}{settings.SCRIPT_SUFFIX}")
        except Exception as e:
            fail(ctx, e)
        entries.append((name, program.description))
    console.print_builtins(entries)


if __name__ == "__main__":
    cli()
