from __future__ import annotations

from click.testing import CliRunner

from instnoth.cli import cli


def invoke(*args, **kwargs):
    return CliRunner().invoke(cli, list(args), **kwargs)


def test_run_quick(write_script, script_text):
    path = write_script(
        "app.instnoth",
        script_text("app", body='message "Hello"\ncreate_dir "/opt/app"\nprogress 100'),
    )

    result = invoke("run", "--quick", str(path))

    assert result.exit_code == 0, result.output
    assert "Hello" in result.output
    assert "Creating directory: /opt/app" in result.output
    assert "app installed successfully" in result.output
    assert "app: INSTALLED" in result.output
    assert "Simulated time" not in result.output


def test_run_verbose_shows_shell_commands(write_script, script_text):
    path = write_script("app.instnoth", script_text("app", body='create_dir "/opt/app"'))

    result = invoke("run", "--quick", "--verbose", str(path))

    assert result.exit_code == 0, result.output
    assert "$ mkdir -p /opt/app" in result.output


def test_quick_from_environment(write_script, script_text):
    path = write_script("app.instnoth", script_text("app", body="delay 100"))

    result = invoke("run", str(path), env={"INSTNOTH_QUICK": "1"})

    assert result.exit_code == 0, result.output
    assert "Simulated time" not in result.output


def test_seed_makes_runs_reproducible(write_script, script_text):
    path = write_script("hw.instnoth", script_text("hw", body="detect_cpu\ndetect_gpu\ndetect_network"))

    first = invoke("run", "--quick", "--seed", "7", str(path))
    second = invoke("run", "--quick", "--seed", "7", str(path))

    assert first.exit_code == 0, first.output
    assert first.output == second.output


def test_run_builtin_by_name():
    result = invoke("run", "--quick", "--seed", "1", "docker")

    assert result.exit_code == 0, result.output
    assert "docker: INSTALLED" in result.output


def test_cycle_exits_with_error(write_script, script_text):
    a = write_script("a.instnoth", script_text("a", "b.instnoth"))
    write_script("b.instnoth", script_text("b", "a.instnoth"))

    result = invoke("run", "--quick", str(a))

    assert result.exit_code == 1
    assert "Circular dependency detected: a -> b -> a" in result.output


def test_skip_deps_ignores_cycle(write_script, script_text):
    a = write_script("a.instnoth", script_text("a", "b.instnoth"))
    write_script("b.instnoth", script_text("b", "a.instnoth"))

    result = invoke("run", "--quick", "--skip-deps", str(a))

    assert result.exit_code == 0, result.output
    assert "a: INSTALLED" in result.output


def test_missing_dependency_warns_but_runs(write_script, script_text):
    path = write_script("app.instnoth", script_text("app", "gone.instnoth"))

    result = invoke("run", "--quick", str(path))

    assert result.exit_code == 0, result.output
    assert "WARNING: Could not load dependency gone.instnoth (required by app)" in result.output


def test_invalid_root_script(write_script):
    path = write_script("bad.instnoth", "package: bad\n")

    result = invoke("run", "--quick", str(path))

    assert result.exit_code == 1
    assert "Invalid script" in result.output


def test_unknown_script(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = invoke("run", "--quick", "nothing-here")

    assert result.exit_code == 1
    assert "Script not found" in result.output


def test_deps_tree(write_script, script_text):
    write_script("lib.instnoth", script_text("lib"))
    path = write_script("app.instnoth", script_text("app", "lib.instnoth", "gone.instnoth"))

    result = invoke("deps", str(path))

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "app"
    assert "  lib" in lines
    assert "  gone.instnoth (missing)" in lines


def test_builtins_lists_scripts():
    result = invoke("builtins")

    assert result.exit_code == 0, result.output
    for name in ("python", "nodejs", "docker", "linux", "all", "devstack"):
        assert name in result.output


def test_debug_prints_base_directory_and_run_order(tmp_path, write_script, script_text):
    write_script("lib.instnoth", script_text("lib"))
    path = write_script("app.instnoth", script_text("app", "lib.instnoth"))

    result = invoke("--debug", "run", "--quick", str(path))

    assert result.exit_code == 0, result.output
    assert f"[DEBUG] Base directory: {tmp_path}" in result.output
    assert "[DEBUG] Run order: lib -> app" in result.output


def test_debug_lines_hidden_by_default(write_script, script_text):
    path = write_script("app.instnoth", script_text("app"))

    result = invoke("run", "--quick", str(path))

    assert result.exit_code == 0, result.output
    assert "[DEBUG]" not in result.output
