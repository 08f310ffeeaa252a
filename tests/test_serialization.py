import pytest
from hashtree.core.root import EMPTY_ROOT, from_hash
from hashtree.core.serialization import (
    canonicalize,
    compute_hash,
    encode_text,
    identity,
    sha256,
)


class TestCanonicalize:
    def test_sorted_keys(self):
        assert canonicalize({"b": 2, "a": 1}) == b'{"a":1,"b":2}'

    def test_no_whitespace(self):
        result = canonicalize({"key": "value", "num": 42})
        assert b" " not in result
        assert b"\n" not in result

    def test_bytes_as_hex(self):
        assert canonicalize({"key": b"\x00\x01\x02"}) == b'{"key":"000102"}'

    def test_root_as_hex(self):
        d = sha256(b"dog")
        assert canonicalize([from_hash(d)]) == f'["{d.hex()}"]'.encode()

    def test_empty_root_as_empty_string(self):
        assert canonicalize({"root": EMPTY_ROOT}) == b'{"root":""}'

    def test_non_ascii_kept(self):
        assert canonicalize({"name": "café"}) == '{"name":"café"}'.encode("utf-8")

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            canonicalize({"s": {1, 2}})

    def test_usable_as_item_serializer(self):
        # dict items hash the same regardless of insertion order
        assert canonicalize({"x": 1, "y": 2}) == canonicalize({"y": 2, "x": 1})


class TestSha256:
    def test_output_length(self):
        assert len(sha256(b"test")) == 32

    def test_known_vector(self):
        assert sha256(b"").hex() == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_different_input_different_output(self):
        assert sha256(b"hello") != sha256(b"world")


class TestComputeHash:
    def test_combines_canonicalize_and_sha256(self):
        d = {"a": 1, "b": 2}
        assert compute_hash(d) == sha256(canonicalize(d))

    def test_root_and_hex_hash_alike(self):
        d = sha256(b"dog")
        assert compute_hash({"root": from_hash(d)}) == compute_hash({"root": d.hex()})


class TestItemSerializers:
    def test_encode_text_utf8(self):
        assert encode_text("dog") == b"dog"
        assert encode_text("café") == "café".encode("utf-8")

    def test_identity_passthrough(self):
        assert identity(b"\x00\xff") == b"\x00\xff"

    def test_identity_copies_bytearray(self):
        assert identity(bytearray(b"ab")) == b"ab"
        assert isinstance(identity(bytearray(b"ab")), bytes)
