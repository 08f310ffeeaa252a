import hashlib
import json
from typing import Any

from hashtree.core.root import Root


def _encode_value(obj):
    """JSON hook: roots and raw bytes become lowercase hex."""
    if isinstance(obj, Root):
        return bytes(obj).hex()
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).hex()
    raise TypeError(f"cannot encode {type(obj).__name__} as canonical JSON")


def canonicalize(data: Any) -> bytes:
    """Canonical JSON bytes of a value: sorted keys, compact separators, UTF-8.

    Doubles as an item serializer for structured items.
    """
    text = json.dumps(
        data, sort_keys=True, separators=(",", ":"),
        ensure_ascii=False, default=_encode_value,
    )
    return text.encode("utf-8")


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def compute_hash(data: Any) -> bytes:
    """SHA-256 of the canonical JSON form."""
    return sha256(canonicalize(data))


# -- Item serializers --


def encode_text(item: str) -> bytes:
    """Serialize a string item as UTF-8."""
    return item.encode("utf-8")


def identity(item: bytes) -> bytes:
    """Serializer for items that are already bytes."""
    return bytes(item)
