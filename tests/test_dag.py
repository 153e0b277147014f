from __future__ import annotations

import logging
from pathlib import Path

import pytest

from instnoth.dag import DependencyResolver, dependency_tree, walk_tree
from instnoth.errors import CycleError
from instnoth.parser import parse
from instnoth.runner import load_script


def names(programs):
    return [p.name for p in programs]


def order_for(*paths, **kwargs):
    resolver = DependencyResolver.for_files(paths, **kwargs)
    return resolver, resolver.order([load_script(p) for p in paths])


def test_dependencies_come_first(write_script, script_text):
    write_script("base.instnoth", script_text("base"))
    write_script("lib.instnoth", script_text("lib", "base.instnoth"))
    app = write_script("app.instnoth", script_text("app", "lib.instnoth"))

    _, order = order_for(app)
    assert names(order) == ["base", "lib", "app"]


def test_diamond_runs_shared_dependency_once(write_script, script_text):
    write_script("d.instnoth", script_text("d"))
    write_script("b.instnoth", script_text("b", "d.instnoth"))
    write_script("c.instnoth", script_text("c", "d.instnoth"))
    app = write_script("app.instnoth", script_text("app", "b.instnoth", "c.instnoth"))

    _, order = order_for(app)
    assert names(order) == ["d", "b", "c", "app"]


def test_root_already_scheduled_is_not_repeated(write_script, script_text):
    lib = write_script("lib.instnoth", script_text("lib"))
    app = write_script("app.instnoth", script_text("app", "lib.instnoth"))

    _, order = order_for(lib, app)
    assert names(order) == ["lib", "app"]

    _, order = order_for(app, lib)
    assert names(order) == ["lib", "app"]


def test_cycle_is_fatal(write_script, script_text):
    a = write_script("a.instnoth", script_text("a", "b.instnoth"))
    write_script("b.instnoth", script_text("b", "a.instnoth"))

    with pytest.raises(CycleError) as info:
        order_for(a)
    assert info.value.name == "a"
    assert str(info.value) == "Circular dependency detected: a -> b -> a"


def test_self_dependency_is_a_cycle(write_script, script_text):
    a = write_script("a.instnoth", script_text("a", "a.instnoth"))

    with pytest.raises(CycleError, match="a -> a"):
        order_for(a)


def test_missing_dependency_is_a_warning(write_script, script_text, caplog):
    app = write_script("app.instnoth", script_text("app", "nope.instnoth"))
    seen = []

    with caplog.at_level(logging.WARNING, logger="instnoth.dag"):
        resolver, order = order_for(app, on_warning=seen.append)

    assert names(order) == ["app"]
    assert len(resolver.warnings) == 1
    warning = resolver.warnings[0]
    assert warning.ref == "nope.instnoth"
    assert warning.required_by == "app"
    assert seen == [warning]
    assert any("nope.instnoth" in r.getMessage() for r in caplog.records)


def test_unparseable_dependency_is_a_warning(write_script, script_text):
    write_script("bad.instnoth", 'version: "1"\n')
    app = write_script("app.instnoth", script_text("app", "bad.instnoth"))

    resolver, order = order_for(app)
    assert names(order) == ["app"]
    assert "package name is missing" in resolver.warnings[0].reason


def test_same_package_name_shares_one_slot(write_script, script_text):
    write_script("one.instnoth", script_text("lib", body='message "one"'))
    write_script("two.instnoth", script_text("lib", body='message "two"'))
    app = write_script("app.instnoth", script_text("app", "one.instnoth", "two.instnoth"))

    _, order = order_for(app)
    assert names(order) == ["lib", "app"]
    assert order[0].phases[0].commands[0].text == "one"


def test_refs_resolve_against_first_root_folder(tmp_path, write_script, script_text):
    # sub/x.instnoth says "y.instnoth", which lives next to the root, not next to x
    write_script("y.instnoth", script_text("y"))
    write_script("sub/x.instnoth", script_text("x", "y.instnoth"))
    root = write_script("root.instnoth", script_text("root", "sub/x.instnoth"))

    resolver, order = order_for(root)
    assert resolver.base_dir == tmp_path
    assert names(order) == ["y", "x", "root"]
    assert resolver.warnings == []


def test_second_root_uses_first_root_folder(tmp_path, write_script, script_text):
    write_script("shared.instnoth", script_text("shared"))
    first = write_script("first.instnoth", script_text("first"))
    other = write_script("elsewhere/second.instnoth", script_text("second", "shared.instnoth"))

    resolver, order = order_for(first, other)
    assert names(order) == ["first", "shared", "second"]


def test_absolute_refs_are_used_as_is(tmp_path, write_script, script_text):
    dep = write_script("far/away/dep.instnoth", script_text("dep"))
    app = write_script("app.instnoth", script_text("app", str(dep.resolve())))

    _, order = order_for(app)
    assert names(order) == ["dep", "app"]


def test_order_can_be_called_again(write_script, script_text):
    lib = write_script("lib.instnoth", script_text("lib", "missing.instnoth"))
    resolver = DependencyResolver.for_files([lib])
    program = load_script(lib)

    assert names(resolver.order([program])) == ["lib"]
    assert names(resolver.order([program])) == ["lib"]
    assert len(resolver.warnings) == 1


def test_very_long_chain_does_not_hit_recursion_limit():
    depth = 3000
    texts = {
        f"p{i}.instnoth": f'package: "p{i}"\n' + (f'depends: "p{i + 1}.instnoth"\n' if i < depth else "")
        for i in range(depth + 1)
    }
    resolver = DependencyResolver("/virtual", loader=lambda path: texts[Path(path).name])

    order = resolver.order([parse(texts["p0.instnoth"])])
    assert len(order) == depth + 1
    assert order[0].name == f"p{depth}"
    assert order[-1].name == "p0"


def test_dependency_tree_marks_repeated_and_missing(write_script, script_text):
    write_script("d.instnoth", script_text("d"))
    write_script("b.instnoth", script_text("b", "d.instnoth"))
    write_script("c.instnoth", script_text("c", "d.instnoth", "gone.instnoth"))
    app = write_script("app.instnoth", script_text("app", "b.instnoth", "c.instnoth"))

    resolver = DependencyResolver.for_files([app])
    trees = dependency_tree([load_script(app)], resolver)

    rows = [
        (depth, node.program.name if node.program else node.ref, node.repeated, node.missing)
        for depth, node in walk_tree(trees)
    ]
    assert rows == [
        (0, "app", False, False),
        (1, "b", False, False),
        (2, "d", False, False),
        (1, "c", False, False),
        (2, "d", True, False),
        (2, "gone.instnoth", False, True),
    ]


def test_dependency_tree_survives_cycles(write_script, script_text):
    a = write_script("a.instnoth", script_text("a", "b.instnoth"))
    write_script("b.instnoth", script_text("b", "a.instnoth"))

    trees = dependency_tree([load_script(a)], DependencyResolver.for_files([a]))
    rows = [(d, n.program.name, n.repeated) for d, n in walk_tree(trees)]
    assert rows == [(0, "a", False), (1, "b", False), (2, "a", True)]


def test_undecodable_dependency_is_a_warning(tmp_path, write_script, script_text):
    (tmp_path / "bad.instnoth").write_bytes(b'package: "bad"\n\xff\xfe\n')
    app = write_script("app.instnoth", script_text("app", "bad.instnoth"))

    resolver, order = order_for(app)
    assert names(order) == ["app"]
    assert [w.ref for w in resolver.warnings] == ["bad.instnoth"]
    assert "utf-8" in resolver.warnings[0].reason
