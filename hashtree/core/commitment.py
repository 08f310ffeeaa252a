from __future__ import annotations

from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from hashtree.core.codec import root_from_hex, root_to_hex
from hashtree.core.config import COMMITMENT_VERSION
from hashtree.core.root import Root
from hashtree.core.serialization import canonicalize, compute_hash
from hashtree.core.tree import Tree, root, size


# -- Ed25519 keys --


def generate_keypair() -> tuple[bytes, bytes]:
    """Generate an Ed25519 keypair. Returns (private_key, public_key) as raw bytes."""
    key = Ed25519PrivateKey.generate()
    private_bytes = key.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
    return private_bytes, _raw_public_key(key)


def public_key_from_private(private_key: bytes) -> bytes:
    return _raw_public_key(Ed25519PrivateKey.from_private_bytes(private_key))


def _raw_public_key(key: Ed25519PrivateKey) -> bytes:
    return key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


@dataclass
class RootCommitment:
    """A published tree root, signed by the party that built the tree."""

    publisher: bytes
    root: Root
    size: int
    timestamp: int
    version: int = COMMITMENT_VERSION
    signature: bytes = b""

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "publisher": self.publisher.hex(),
            "root": root_to_hex(self.root),
            "size": self.size,
            "timestamp": self.timestamp,
            "signature": self.signature.hex(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> RootCommitment:
        return cls(
            publisher=bytes.fromhex(d["publisher"]),
            root=root_from_hex(d["root"]),
            size=d["size"],
            timestamp=d["timestamp"],
            version=d.get("version", COMMITMENT_VERSION),
            signature=bytes.fromhex(d.get("signature", "")),
        )

    def signed_fields(self) -> dict:
        """Everything the signature covers; roots and keys hex-encode in canonicalize."""
        return {
            "version": self.version,
            "publisher": self.publisher,
            "root": self.root,
            "size": self.size,
            "timestamp": self.timestamp,
        }

    def commitment_hash(self) -> bytes:
        """Content address: SHA-256 of the signed fields."""
        return compute_hash(self.signed_fields())

    def sign_commitment(self, private_key: bytes) -> None:
        payload = canonicalize(self.signed_fields())
        self.signature = Ed25519PrivateKey.from_private_bytes(private_key).sign(payload)

    def verify_signature(self) -> bool:
        """Check the signature against the publisher key."""
        if not self.signature:
            return False
        payload = canonicalize(self.signed_fields())
        try:
            Ed25519PublicKey.from_public_bytes(self.publisher).verify(
                self.signature, payload
            )
            return True
        except (InvalidSignature, ValueError):
            return False


def commit(tree: Tree, private_key: bytes, timestamp: int) -> RootCommitment:
    """Build and sign a commitment to a tree's root."""
    commitment = RootCommitment(
        publisher=public_key_from_private(private_key),
        root=root(tree),
        size=size(tree),
        timestamp=timestamp,
    )
    commitment.sign_commitment(private_key)
    return commitment
