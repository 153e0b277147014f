from __future__ import annotations

import re
from pathlib import Path

import pytest

from instnoth.errors import ScriptNotFoundError
from instnoth.interpreter import Interpreter
from instnoth.parser import ScriptParser
from instnoth.runner import (
    BUILTIN_DIR,
    RunOptions,
    discover_script,
    list_builtins,
    make_interpreter,
    plan,
    run_plan,
)
from instnoth.ui.console import Console

BUILTINS = ["all", "devstack", "docker", "linux", "nodejs", "python"]


def test_list_builtins():
    assert list_builtins() == BUILTINS


@pytest.mark.parametrize("name", BUILTINS)
def test_builtin_scripts_parse_cleanly(name):
    path = BUILTIN_DIR / f"{name}.instnoth"
    parser = ScriptParser(path.read_text(encoding="utf-8"), source=path)
    program = parser.parse()

    assert program.name == name
    assert program.description
    assert parser.dropped == []


def test_discover_script(tmp_path, monkeypatch, write_script, script_text):
    monkeypatch.chdir(tmp_path)
    path = write_script("tool.instnoth", script_text("tool"))

    assert discover_script(str(path)) == path
    assert discover_script("tool").resolve() == path.resolve()
    assert discover_script("docker") == BUILTIN_DIR / "docker.instnoth"
    assert discover_script("docker.instnoth") == BUILTIN_DIR / "docker.instnoth"

    with pytest.raises(ScriptNotFoundError) as info:
        discover_script("no/such/thing")
    assert info.value.ref == "no/such/thing"


def test_local_file_wins_over_builtin(tmp_path, monkeypatch, write_script, script_text):
    monkeypatch.chdir(tmp_path)
    write_script("python.instnoth", script_text("my-python"))

    assert discover_script("python").resolve() == (tmp_path / "python.instnoth").resolve()


def test_plan_orders_builtin_dependencies():
    install_plan = plan([BUILTIN_DIR / "devstack.instnoth"])

    assert [p.name for p in install_plan.roots] == ["devstack"]
    assert [p.name for p in install_plan.order] == ["python", "nodejs", "docker", "all", "devstack"]
    assert install_plan.base_dir == BUILTIN_DIR
    assert install_plan.warnings == []


def test_plan_skip_deps_keeps_roots(write_script, script_text):
    app = write_script("app.instnoth", script_text("app", "missing.instnoth"))

    install_plan = plan([app], skip_deps=True)
    assert [p.name for p in install_plan.order] == ["app"]
    assert install_plan.warnings == []


def test_plan_collects_warnings(write_script, script_text):
    app = write_script("app.instnoth", script_text("app", "missing.instnoth"))

    install_plan = plan([app])
    assert [w.ref for w in install_plan.warnings] == ["missing.instnoth"]


def test_run_plan_reports_every_program(facts, capsys):
    install_plan = plan([BUILTIN_DIR / "all.instnoth"])
    interpreter = Interpreter(facts, quick=True)

    results = run_plan(install_plan, interpreter, Console())

    assert results == {
        "python": "installed",
        "nodejs": "installed",
        "docker": "installed",
        "all": "installed",
    }
    out = capsys.readouterr().out
    assert "INSTALL PLAN" in out
    assert "✓ docker installed successfully" in out
    assert "▶ Preparation" in out


def test_single_program_has_no_plan(write_script, script_text, facts, capsys):
    app = write_script("app.instnoth", script_text("app", body='progress 40'))

    run_plan(plan([app]), Interpreter(facts, quick=True), Console())

    out = capsys.readouterr().out
    assert "INSTALL PLAN" not in out
    assert " 40%" in out


def test_make_interpreter_follows_options(facts):
    interpreter = make_interpreter(RunOptions(quick=True, verbose=True, seed=3), facts=facts)

    assert interpreter.quick and interpreter.verbose
    assert interpreter.facts is facts


def test_run_plan_resets_progress_per_program(write_script, script_text, facts):
    write_script("a.instnoth", script_text("a", body="progress 70"))
    b = write_script("b.instnoth", script_text("b", "a.instnoth", body='message "hi"'))
    interpreter = Interpreter(facts, quick=True)

    run_plan(plan([b]), interpreter, Console())

    assert interpreter.progress == 0


def test_package_readme_is_user_documentation():
    root = Path(__file__).resolve().parent.parent
    match = re.search(r'^readme = "([^"]+)"', (root / "pyproject.toml").read_text(encoding="utf-8"), re.M)

    assert match is not None
    assert match.group(1) == "README.md"
    assert (root / match.group(1)).is_file()
