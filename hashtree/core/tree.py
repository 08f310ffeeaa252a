from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from hashtree.core.root import EMPTY_ROOT, Root, combine, from_hash
from hashtree.core.serialization import sha256

logger = logging.getLogger(__name__)

Serializer = Callable[[Any], bytes]


@dataclass(frozen=True)
class Empty:
    """A tree with no items."""


@dataclass(frozen=True)
class Leaf:
    """A single item and the SHA-256 of its serialization."""

    value: Any
    digest: bytes


@dataclass(frozen=True)
class Node:
    """Internal node caching combine(root(left), root(right))."""

    root: Root
    left: Tree
    right: Tree


# Union type for all tree shapes
Tree = Empty | Leaf | Node


def item_digest(item: Any, serialize: Serializer) -> bytes:
    """Leaf digest of an item: sha256(serialize(item))."""
    return sha256(serialize(item))


def from_list(items: Sequence[Any], serialize: Serializer) -> Tree:
    """Build a tree over items in order, splitting each run at floor(n / 2)."""
    items = list(items)
    tree = _build(items, 0, len(items), serialize)
    logger.debug(f"built tree of {len(items)} items, root {root(tree)!r}")
    return tree


def _build(items: list, start: int, end: int, serialize: Serializer) -> Tree:
    count = end - start
    if count == 0:
        return Empty()
    if count == 1:
        value = items[start]
        return Leaf(value=value, digest=item_digest(value, serialize))
    cutoff = start + count // 2
    left = _build(items, start, cutoff, serialize)
    right = _build(items, cutoff, end, serialize)
    return Node(root=combine(root(left), root(right)), left=left, right=right)


# -- Structural utilities --


def root(tree: Tree) -> Root:
    """Root of a tree; the empty sentinel for an empty tree."""
    if isinstance(tree, Node):
        return tree.root
    if isinstance(tree, Leaf):
        return from_hash(tree.digest)
    return EMPTY_ROOT


def size(tree: Tree) -> int:
    """Number of leaves."""
    if isinstance(tree, Node):
        return size(tree.left) + size(tree.right)
    if isinstance(tree, Leaf):
        return 1
    return 0


def is_empty(tree: Tree) -> bool:
    return isinstance(tree, Empty)


def depth(tree: Tree) -> int:
    """Edges on the longest leaf-to-root path; bounds the length of any proof."""
    if isinstance(tree, Node):
        return 1 + max(depth(tree.left), depth(tree.right))
    return 0


def to_list(tree: Tree) -> list:
    """Leaf values from left to right."""
    values: list = []
    _collect(tree, values)
    return values


def _collect(tree: Tree, values: list) -> None:
    if isinstance(tree, Node):
        _collect(tree.left, values)
        _collect(tree.right, values)
    elif isinstance(tree, Leaf):
        values.append(tree.value)


def equals(a: Tree, b: Tree) -> bool:
    """Trees are equal when they commit to the same root."""
    return root(a) == root(b)
