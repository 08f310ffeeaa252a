from hashtree.core.commitment import (
    RootCommitment,
    commit,
    generate_keypair,
    public_key_from_private,
)
from hashtree.core.root import EMPTY_ROOT
from hashtree.core.serialization import compute_hash, encode_text
from hashtree.core.tree import Empty, from_list, root

ITEMS = ["dog", "cat", "mouse"]


def make_commitment():
    priv, pub = generate_keypair()
    tree = from_list(ITEMS, encode_text)
    return commit(tree, priv, timestamp=1000000), tree, priv, pub


class TestKeys:
    def test_key_lengths(self):
        priv, pub = generate_keypair()
        assert len(priv) == 32
        assert len(pub) == 32

    def test_public_key_derivation(self):
        priv, pub = generate_keypair()
        assert public_key_from_private(priv) == pub


class TestCommit:
    def test_fields(self):
        c, tree, _, pub = make_commitment()
        assert c.publisher == pub
        assert c.root == root(tree)
        assert c.size == 3
        assert len(c.signature) == 64

    def test_signature_valid(self):
        c, _, _, _ = make_commitment()
        assert c.verify_signature()

    def test_empty_tree(self):
        priv, _ = generate_keypair()
        c = commit(Empty(), priv, timestamp=1)
        assert c.root == EMPTY_ROOT
        assert c.size == 0
        assert c.verify_signature()


class TestSignature:
    def test_unsigned_fails(self):
        _, pub = generate_keypair()
        c = RootCommitment(publisher=pub, root=EMPTY_ROOT, size=0, timestamp=1)
        assert not c.verify_signature()

    def test_tampered_root_fails(self):
        c, _, _, _ = make_commitment()
        c.root = root(from_list(["other"], encode_text))
        assert not c.verify_signature()

    def test_tampered_size_fails(self):
        c, _, _, _ = make_commitment()
        c.size = 4
        assert not c.verify_signature()

    def test_wrong_publisher_fails(self):
        c, _, _, _ = make_commitment()
        _, other = generate_keypair()
        c.publisher = other
        assert not c.verify_signature()

    def test_malformed_publisher_fails(self):
        c, _, _, _ = make_commitment()
        c.publisher = b"\x01" * 5
        assert not c.verify_signature()


class TestCommitmentHash:
    def test_excludes_signature(self):
        c, _, _, _ = make_commitment()
        h1 = c.commitment_hash()
        c.signature = b""
        assert c.commitment_hash() == h1

    def test_depends_on_root(self):
        c, _, _, _ = make_commitment()
        h1 = c.commitment_hash()
        c.root = EMPTY_ROOT
        assert c.commitment_hash() != h1


class TestRoundtrip:
    def test_to_dict_from_dict(self):
        c, _, _, _ = make_commitment()
        restored = RootCommitment.from_dict(c.to_dict())
        assert restored == c
        assert restored.verify_signature()

    def test_empty_root_dict(self):
        priv, _ = generate_keypair()
        c = commit(Empty(), priv, timestamp=1)
        assert c.to_dict()["root"] == ""
        assert RootCommitment.from_dict(c.to_dict()).root == EMPTY_ROOT


class TestSignedFields:
    def test_carries_raw_values(self):
        c, tree, _, pub = make_commitment()
        fields = c.signed_fields()
        assert fields["publisher"] == pub
        assert fields["root"] == root(tree)
        assert "signature" not in fields

    def test_hash_matches_hex_dict(self):
        c, _, _, _ = make_commitment()
        d = c.to_dict()
        del d["signature"]
        assert c.commitment_hash() == compute_hash(d)
