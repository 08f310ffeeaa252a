"""CLI entry point for building roots, proving and verifying membership."""
from __future__ import annotations

import argparse
import logging
import sys

from hashtree.core.codec import (
    decode_proof,
    encode_proof,
    root_from_hex,
    root_to_hex,
)
from hashtree.core.config import DEFAULT_LOG_LEVEL
from hashtree.core.proof import get_proof, is_member
from hashtree.core.serialization import encode_text
from hashtree.core.tree import from_list, root

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hashtree", description="hashtree Merkle tool")
    parser.add_argument(
        "--log-level", default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_root = sub.add_parser("root", help="Print the root of the items in a file")
    p_root.add_argument("file", help="Text file, one item per line")

    p_prove = sub.add_parser("prove", help="Print a membership proof (hex)")
    p_prove.add_argument("file", help="Text file, one item per line")
    p_prove.add_argument("item", help="Item to prove")

    p_verify = sub.add_parser("verify", help="Check a membership proof")
    p_verify.add_argument("root", help="Root (hex)")
    p_verify.add_argument("item", help="Claimed item")
    p_verify.add_argument("proof", help="Proof (hex)")

    return parser.parse_args(argv)


def read_items(path: str) -> list[str]:
    """Non-empty lines of a UTF-8 file, in order."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f if line.strip()]


def load_items(path: str) -> list[str] | None:
    """read_items, reporting unreadable files on stderr instead of raising."""
    try:
        return read_items(path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {path}: {e}", file=sys.stderr)
        return None


def cmd_root(args: argparse.Namespace) -> int:
    items = load_items(args.file)
    if items is None:
        return 2
    tree = from_list(items, encode_text)
    logger.info(f"built tree over {len(items)} items from {args.file}")
    print(root_to_hex(root(tree)))
    return 0


def cmd_prove(args: argparse.Namespace) -> int:
    items = load_items(args.file)
    if items is None:
        return 2
    tree = from_list(items, encode_text)
    proof = get_proof(tree, args.item, encode_text)
    if proof is None:
        print(f"item not found: {args.item}", file=sys.stderr)
        return 1
    print(encode_proof(proof).hex())
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    try:
        tree_root = root_from_hex(args.root)
        proof = decode_proof(bytes.fromhex(args.proof))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    valid = is_member(tree_root, args.item, proof, encode_text)
    print("valid" if valid else "invalid")
    return 0 if valid else 1


COMMANDS = {
    "root": cmd_root,
    "prove": cmd_prove,
    "verify": cmd_verify,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
