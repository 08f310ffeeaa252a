from __future__ import annotations

import hashlib
from dataclasses import dataclass

from hashtree.core.config import HASH_SIZE


@dataclass(frozen=True, slots=True)
class Root:
    """Content commitment of a tree: a SHA-256 digest, or the empty sentinel.

    Compares byte-exactly. Build with ``from_hash``, ``combine`` or from a
    tree; the sentinel is ``EMPTY_ROOT``.
    """

    _digest: bytes

    def __post_init__(self) -> None:
        if not isinstance(self._digest, (bytes, bytearray, memoryview)):
            raise TypeError(f"root must be bytes, got {type(self._digest).__name__}")
        digest = bytes(self._digest)
        if len(digest) not in (0, HASH_SIZE):
            raise ValueError(f"root must be 0 or {HASH_SIZE} bytes, got {len(digest)}")
        object.__setattr__(self, "_digest", digest)

    def __bytes__(self) -> bytes:
        return self._digest

    def __repr__(self) -> str:
        if self.is_empty:
            return "Root(<empty>)"
        return f"Root({self._digest.hex()})"

    @property
    def is_empty(self) -> bool:
        return not self._digest


EMPTY_ROOT = Root(b"")


def from_hash(digest: bytes) -> Root:
    """Wrap a raw digest as a Root. No check is made that it came from a tree."""
    if not isinstance(digest, (bytes, bytearray, memoryview)):
        raise TypeError(f"digest must be bytes, got {type(digest).__name__}")
    if len(digest) != HASH_SIZE:
        raise ValueError(f"digest must be {HASH_SIZE} bytes, got {len(digest)}")
    return Root(bytes(digest))


def to_hash(root: Root) -> bytes | None:
    """Return the digest bytes, or None for the empty-tree sentinel."""
    if root.is_empty:
        return None
    return bytes(root)


def combine(left: Root, right: Root) -> Root:
    """Parent root: SHA-256 over the concatenated child roots."""
    return Root(hashlib.sha256(bytes(left) + bytes(right)).digest())
