from __future__ import annotations

import logging
from typing import Any

from hashtree.core.commitment import RootCommitment
from hashtree.core.config import COMMITMENT_VERSION, PUBLIC_KEY_SIZE
from hashtree.core.proof import Proof, is_member
from hashtree.core.tree import Serializer

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    pass


def validate_commitment(commitment: RootCommitment) -> None:
    """Validate commitment structure and signature."""
    if commitment.version != COMMITMENT_VERSION:
        raise ValidationError(f"unsupported commitment version: {commitment.version}")
    if len(commitment.publisher) != PUBLIC_KEY_SIZE:
        raise ValidationError(f"publisher key must be {PUBLIC_KEY_SIZE} bytes")
    if commitment.size < 0:
        raise ValidationError("size must be non-negative")
    if commitment.root.is_empty != (commitment.size == 0):
        raise ValidationError("empty root must commit to exactly zero items")
    if not commitment.verify_signature():
        raise ValidationError("invalid commitment signature")


def require_membership(
    commitment: RootCommitment, item: Any, proof: Proof, serialize: Serializer
) -> None:
    """Accept item only if proof shows it under the commitment's root."""
    validate_commitment(commitment)
    if not is_member(commitment.root, item, proof, serialize):
        logger.debug(
            f"rejected membership claim against {commitment.commitment_hash().hex()}"
        )
        raise ValidationError("item is not a member of the committed tree")
