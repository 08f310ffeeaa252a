from __future__ import annotations

import logging
import struct

from hashtree.core.config import (
    HASH_SIZE,
    MAX_PROOF_LENGTH,
    PROOF_COUNT_SIZE,
    PROOF_STEP_SIZE,
    PROOF_TAG_LEFT,
    PROOF_TAG_RIGHT,
)
from hashtree.core.proof import Left, Proof, ProofStep, Right
from hashtree.core.root import EMPTY_ROOT, Root, from_hash

logger = logging.getLogger(__name__)


class ProofDecodeError(ValueError):
    pass


# -- Roots --


def encode_root(root: Root) -> bytes:
    """Raw root bytes: empty for the sentinel, otherwise the digest."""
    return bytes(root)


def decode_root(data: bytes) -> Root:
    if len(data) == 0:
        return EMPTY_ROOT
    if len(data) != HASH_SIZE:
        raise ProofDecodeError(f"root must be 0 or {HASH_SIZE} bytes, got {len(data)}")
    return from_hash(data)


def root_to_hex(root: Root) -> str:
    return bytes(root).hex()


def root_from_hex(s: str) -> Root:
    try:
        data = bytes.fromhex(s)
    except ValueError as e:
        raise ProofDecodeError(f"invalid root hex: {e}") from e
    return decode_root(data)


# Wire format: [2 bytes big-endian step count][count x (1 byte tag)(32 bytes digest)]


def encode_proof(proof: Proof) -> bytes:
    """Serialize a proof, preserving its bottom-up step order."""
    if len(proof) > MAX_PROOF_LENGTH:
        raise ValueError(f"proof too long: {len(proof)} steps")
    parts = [struct.pack("!H", len(proof))]
    for step in proof:
        parts.append(struct.pack("!B", _tag(step)) + _sibling_bytes(step))
    return b"".join(parts)


def decode_proof(data: bytes) -> Proof:
    """Deserialize proof bytes produced by encode_proof."""
    if len(data) < PROOF_COUNT_SIZE:
        raise ProofDecodeError("proof missing step count")
    (count,) = struct.unpack("!H", data[:PROOF_COUNT_SIZE])
    if count > MAX_PROOF_LENGTH:
        raise ProofDecodeError(f"proof too long: {count} steps")
    expected = PROOF_COUNT_SIZE + count * PROOF_STEP_SIZE
    if len(data) != expected:
        logger.debug(f"proof length mismatch: expected {expected}, got {len(data)}")
        raise ProofDecodeError(
            f"proof of {count} steps must be {expected} bytes, got {len(data)}"
        )
    proof: Proof = []
    offset = PROOF_COUNT_SIZE
    for _ in range(count):
        tag = data[offset]
        sibling = from_hash(data[offset + 1:offset + PROOF_STEP_SIZE])
        if tag == PROOF_TAG_LEFT:
            proof.append(Left(sibling))
        elif tag == PROOF_TAG_RIGHT:
            proof.append(Right(sibling))
        else:
            raise ProofDecodeError(f"unknown proof step tag: {tag}")
        offset += PROOF_STEP_SIZE
    return proof


def _tag(step: ProofStep) -> int:
    if isinstance(step, Left):
        return PROOF_TAG_LEFT
    if isinstance(step, Right):
        return PROOF_TAG_RIGHT
    raise TypeError(f"unknown proof step: {type(step)}")


def _sibling_bytes(step: ProofStep) -> bytes:
    data = bytes(step.sibling)
    if len(data) != HASH_SIZE:
        raise ValueError("proof sibling must be a non-empty root")
    return data


# -- JSON form --


def proof_to_dict(proof: Proof) -> list[dict]:
    return [
        {"side": "left" if isinstance(step, Left) else "right",
         "hash": _sibling_bytes(step).hex()}
        for step in proof
    ]


def proof_from_dict(items: list[dict]) -> Proof:
    proof: Proof = []
    for item in items:
        try:
            sibling = from_hash(bytes.fromhex(item["hash"]))
            side = item["side"]
        except (KeyError, ValueError) as e:
            raise ProofDecodeError(f"invalid proof step: {e}") from e
        if side == "left":
            proof.append(Left(sibling))
        elif side == "right":
            proof.append(Right(sibling))
        else:
            raise ProofDecodeError(f"unknown proof step side: {side!r}")
    return proof
