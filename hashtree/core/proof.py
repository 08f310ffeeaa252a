from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from hashtree.core.config import HASH_SIZE
from hashtree.core.root import Root, to_hash
from hashtree.core.serialization import sha256
from hashtree.core.tree import Leaf, Node, Serializer, Tree, item_digest, root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Left:
    """Sibling on the left: running = combine(sibling, running)."""

    sibling: Root


@dataclass(frozen=True)
class Right:
    """Sibling on the right: running = combine(running, sibling)."""

    sibling: Root


ProofStep = Left | Right

# Sibling steps ordered bottom-up: the first step sits next to the leaf.
Proof = list[ProofStep]


# -- Generation --


def get_proof(tree: Tree, item: Any, serialize: Serializer) -> Proof | None:
    """Membership proof for item, or None if no leaf carries its digest.

    The left subtree is searched before the right one and the first match
    wins, so duplicate digests resolve to the leftmost leaf.
    """
    target = item_digest(item, serialize)
    proof = _search(tree, target)
    if proof is None:
        logger.debug(f"no leaf with digest {target.hex()}")
    return proof


def _search(tree: Tree, target: bytes) -> list[ProofStep] | None:
    if isinstance(tree, Leaf):
        return [] if tree.digest == target else None
    if not isinstance(tree, Node):
        return None
    found = _search(tree.left, target)
    if found is not None:
        found.append(Right(root(tree.right)))
        return found
    found = _search(tree.right, target)
    if found is not None:
        found.append(Left(root(tree.left)))
        return found
    return None


def proof_index(tree: Tree) -> dict[bytes, Proof]:
    """Proofs for every distinct leaf digest, keyed by that digest.

    Walks the tree once. When digests repeat the leftmost leaf is kept,
    matching get_proof.
    """
    index: dict[bytes, Proof] = {}
    stack: list[ProofStep] = []
    _index(tree, stack, index)
    return index


def _index(tree: Tree, stack: list[ProofStep], index: dict[bytes, Proof]) -> None:
    if isinstance(tree, Leaf):
        if tree.digest not in index:
            index[tree.digest] = stack[::-1]
        return
    if not isinstance(tree, Node):
        return
    stack.append(Right(root(tree.right)))
    _index(tree.left, stack, index)
    stack[-1] = Left(root(tree.left))
    _index(tree.right, stack, index)
    stack.pop()


# -- Verification --


def verify_proof(tree_root: Root, item_hash: bytes, proof: Proof) -> bool:
    """Replay proof from item_hash and compare the result with tree_root."""
    if len(item_hash) != HASH_SIZE:
        raise ValueError(f"item hash must be {HASH_SIZE} bytes, got {len(item_hash)}")
    expected = to_hash(tree_root)
    if expected is None:
        return False
    running = bytes(item_hash)
    for step in proof:
        if isinstance(step, Left):
            running = sha256(bytes(step.sibling) + running)
        elif isinstance(step, Right):
            running = sha256(running + bytes(step.sibling))
        else:
            raise TypeError(f"unknown proof step: {type(step)}")
    return running == expected


def is_member(tree_root: Root, item: Any, proof: Proof, serialize: Serializer) -> bool:
    """Check that item is committed to by tree_root, given its proof."""
    valid = verify_proof(tree_root, item_digest(item, serialize), proof)
    if not valid:
        logger.debug(f"membership proof rejected against {tree_root!r}")
    return valid
