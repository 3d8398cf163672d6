"""Path resolution and tree descent for the in-memory tree.

A tree is a nested dict: dicts are directories (segment -> node) and bytes
values are files. ``resolve()`` turns a textual path into descent steps,
which ``get_in()``, ``put_in()`` and ``pop_in()`` walk from the root.

Example:
    >>> tree = {}
    >>> put_in(tree, resolve("docs/a.txt", dict), b"hi")
    >>> tree
    {'docs': {'a.txt': b'hi'}}
    >>> get_in(tree, resolve("/docs/a.txt"))
    b'hi'
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Any, Callable, Union

from .errors import PathConflictError

Node = Union[dict, bytes]


class _Missing:
    """Sentinel for an absent node or a lookup-only step."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class DescentStep:
    """One segment-resolution instruction.

    Attributes:
        segment: Name to look up in the current directory.
        create: Factory for the node to use when the segment is absent,
            or MISSING for a lookup-only step.
    """

    segment: str
    create: Callable[[], Node] | Any = MISSING

    @property
    def lookup_only(self) -> bool:
        return self.create is MISSING


def normalize(path: str) -> str:
    """Anchor path at the root and collapse ``.``, ``..`` and extra slashes.

    Only ``/`` separates segments; a backslash is an ordinary character.
    """
    if not path:
        return "/"
    path = posixpath.normpath("/" + path)
    # normpath preserves a leading "//"
    return "/" + path.lstrip("/")


def segments(path: str) -> list[str]:
    """Split a path into its non-empty segments, root-to-leaf."""
    return [s for s in normalize(path).split("/") if s]


def resolve(path: str, default: Callable[[], Node] | Any = MISSING) -> list[DescentStep]:
    """Build the descent steps for path.

    Args:
        path: Absolute or root-relative path.
        default: Factory for the terminal node when it is absent. Supplying
            any default also makes every intermediate step create an empty
            directory when absent (write-style resolution); leaving it
            MISSING makes every step lookup-only (read-style resolution).

    Returns:
        Steps in root-to-leaf order. The root itself resolves to no steps.
    """
    parts = segments(path)
    intermediate = MISSING if default is MISSING else dict
    steps = [DescentStep(segment, intermediate) for segment in parts[:-1]]
    if parts:
        steps.append(DescentStep(parts[-1], default))
    return steps


def get_in(tree: dict, steps: list[DescentStep]) -> Node | Any:
    """Return the node the steps lead to, or MISSING.

    Nothing is inserted into the tree. An absent terminal falls back to its
    step's default; an absent intermediate, or one that is a file, makes the
    whole lookup MISSING.
    """
    node: Node = tree
    for i, step in enumerate(steps):
        if not isinstance(node, dict):
            return MISSING
        child = node.get(step.segment, MISSING)
        if child is MISSING:
            last = i == len(steps) - 1
            if last and not step.lookup_only:
                return step.create()
            return MISSING
        node = child
    return node


def _parent(tree: dict, steps: list[DescentStep], create: bool, path: str) -> dict | Any:
    """Walk to the directory holding the terminal step."""
    node = tree
    for step in steps[:-1]:
        child = node.get(step.segment, MISSING)
        if child is MISSING:
            if not create or step.lookup_only:
                return MISSING
            child = node[step.segment] = step.create()
        if not isinstance(child, dict):
            if create:
                raise PathConflictError(path, f"Not a directory: '{step.segment}'")
            return MISSING
        node = child
    return node


def put_in(tree: dict, steps: list[DescentStep], value: Node, path: str = "") -> None:
    """Store value at the terminal step, creating missing intermediates.

    Raises:
        PathConflictError: If an intermediate segment is a file, or if the
            steps address the root.
    """
    if not steps:
        raise PathConflictError(path or "/", "Cannot replace the root directory")
    parent = _parent(tree, steps, True, path)
    if parent is MISSING:
        # lookup-only intermediate missing
        raise PathConflictError(path, "No such directory")
    parent[steps[-1].segment] = value


def pop_in(tree: dict, steps: list[DescentStep]) -> Node | Any:
    """Remove and return the node the steps lead to, or MISSING.

    The root is never removed: popping it empties it and returns the
    previous children.
    """
    if not steps:
        removed = dict(tree)
        tree.clear()
        return removed
    parent = _parent(tree, steps, False, "")
    if parent is MISSING:
        return MISSING
    return parent.pop(steps[-1].segment, MISSING)
