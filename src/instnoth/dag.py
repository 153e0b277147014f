# dag.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Set, Tuple, Union

from .errors import CycleError, DependencyLoadWarning, InstnothError
from .model import Program
from .parser import parse

logger = logging.getLogger(__name__)

Loader = Callable[[Path], str]


def read_script(path: Path) -> str:
    """Default loader: the script's text, raising OSError if unreadable."""
    return Path(path).read_text(encoding="utf-8")


class DependencyResolver:
    """
    Linearize programs so every program comes after its dependencies.

    All relative dependency refs resolve against one base directory for the
    whole run, whichever file declared them. Dependency files are loaded and
    parsed on demand, once per reference.

    Programs are keyed by name: two files declaring the same package name
    share one slot, and the first one visited wins.
    """

    def __init__(
        self,
        base_dir: Union[str, Path] = ".",
        *,
        loader: Loader = read_script,
        on_warning: Optional[Callable[[DependencyLoadWarning], None]] = None,
    ):
        self.base_dir = Path(base_dir)
        self.loader = loader
        self.on_warning = on_warning
        self.warnings: List[DependencyLoadWarning] = []

    @classmethod
    def for_files(cls, paths: Iterable[Union[str, Path]], **kwargs) -> "DependencyResolver":
        """Resolver whose base directory is the folder of the first file."""
        first = next(iter(paths), None)
        base = Path(first).parent if first is not None else Path(".")
        return cls(base, **kwargs)

    def resolve_path(self, ref: str) -> Path:
        path = Path(ref)
        if path.is_absolute():
            return path
        return self.base_dir / path

    def load(self, ref: str, required_by: Optional[str] = None) -> Optional[Program]:
        """
        Load and parse one dependency ref.

        Failures are not fatal: they become a DependencyLoadWarning and the
        caller skips the edge.
        """
        path = self.resolve_path(ref)
        try:
            return parse(self.loader(path), source=path)
        except (OSError, UnicodeDecodeError, InstnothError) as e:
            warning = DependencyLoadWarning(ref=ref, path=path, reason=str(e), required_by=required_by)
            self.warnings.append(warning)
            logger.warning("%s", warning)
            if self.on_warning is not None:
                self.on_warning(warning)
            return None

    def order(self, roots: Iterable[Program]) -> List[Program]:
        """
        Depth-first, post-order walk over every root.

        Uses an explicit stack so long dependency chains cannot exhaust the
        interpreter's recursion limit. Visitation state lives only for the
        duration of this call.

        Raises:
            CycleError: a program is reached again while still on the path.
        """
        self.warnings = []
        order: List[Program] = []
        scheduled: Set[str] = set()

        for root in roots:
            self._visit(root, order, scheduled)

        logger.debug("Run order: %s", [p.name for p in order])
        return order

    def _visit(self, root: Program, order: List[Program], scheduled: Set[str]) -> None:
        if root.name in scheduled:
            return

        # path: names in visitation order; on_path for membership
        path: List[str] = [root.name]
        on_path: Set[str] = {root.name}
        stack: List[Tuple[Program, Iterator[str]]] = [(root, iter(root.depends))]

        while stack:
            program, refs = stack[-1]

            for ref in refs:
                dep = self.load(ref, required_by=program.name)
                if dep is None:
                    continue
                if dep.name in on_path:
                    raise CycleError(dep.name, chain=list(path))
                if dep.name in scheduled:
                    continue
                path.append(dep.name)
                on_path.add(dep.name)
                stack.append((dep, iter(dep.depends)))
                break
            else:
                stack.pop()
                path.pop()
                on_path.discard(program.name)
                scheduled.add(program.name)
                order.append(program)


# ----------------------------------------------------------------------
# Dependency tree (display only)
# ----------------------------------------------------------------------

@dataclass
class DependencyNode:
    """
    One node of a dependency tree.

    ref is None for roots. `repeated` marks a program already expanded
    elsewhere in the tree; `missing` marks a ref that could not be loaded.
    """
    ref: Optional[str]
    program: Optional[Program]
    children: List["DependencyNode"] = field(default_factory=list)
    repeated: bool = False
    missing: bool = False


def dependency_tree(roots: Iterable[Program], resolver: DependencyResolver) -> List[DependencyNode]:
    """
    Build a tree of declared dependencies for display.

    Each program is expanded once; later occurrences are marked repeated,
    which also keeps cyclic graphs finite.
    """
    shown: Set[str] = set()
    trees: List[DependencyNode] = []

    for root in roots:
        top = DependencyNode(ref=None, program=root)
        trees.append(top)
        pending: List[DependencyNode] = [top]

        while pending:
            node = pending.pop()
            program = node.program
            if program is None:
                continue
            if program.name in shown:
                node.repeated = True
                continue
            shown.add(program.name)

            for ref in program.depends:
                dep = resolver.load(ref, required_by=program.name)
                node.children.append(DependencyNode(ref=ref, program=dep, missing=dep is None))

            # reversed so the first declared child is expanded first
            pending.extend(reversed(node.children))

    return trees


def walk_tree(nodes: Iterable[DependencyNode], depth: int = 0) -> Iterator[Tuple[int, DependencyNode]]:
    """Yield (depth, node) pairs in display order."""
    stack: List[Tuple[int, DependencyNode]] = [(depth, n) for n in reversed(list(nodes))]
    while stack:
        d, node = stack.pop()
        yield d, node
        stack.extend((d + 1, child) for child in reversed(node.children))
