import argparse
import json
import logging
import sys

from peer_id.exceptions import (
    BasePeerIdError,
    EncodingError,
)
from peer_id.id import (
    PeerID,
    create_from_b58_string,
    create_from_hex_string,
    create_new_peer_id,
)
from peer_id.identity_utils import (
    load_identity,
    save_identity,
)

logger = logging.getLogger("peer_id.identity-example")


def parse_peer_id(text: str) -> PeerID:
    """Accept a peer id in hex form, falling back to base58."""
    try:
        return create_from_hex_string(text)
    except EncodingError:
        return create_from_b58_string(text)


def run_generate(bits: int, output: str | None) -> int:
    peer_id = create_new_peer_id(bits)
    if output:
        save_identity(peer_id, output)
        print(f"Saved identity {peer_id} to {output}")
    else:
        print(json.dumps(peer_id.to_json(), indent=2))
    return 0


def run_show(path: str) -> int:
    peer_id = load_identity(path)
    print(json.dumps(peer_id.to_print(), indent=2))
    return 0


def run_inspect(text: str) -> int:
    peer_id = parse_peer_id(text)
    print(f"base58: {peer_id.to_base58()}")
    print(f"hex:    {peer_id.to_hex_string()}")
    print(f"length: {len(peer_id.to_bytes())} bytes")
    return 0


def main(argv: list[str] | None = None) -> int:
    description = """
    Generate, show and inspect RSA-derived peer identities.
    Run 'peer-id-demo generate -o my_peer.json' to create an identity,
    'peer-id-demo show my_peer.json' to print it and
    'peer-id-demo inspect <PEER_ID>' to decode a base58 or hex peer id.
    """
    parser = argparse.ArgumentParser(description=description)
    subparsers = parser.add_subparsers(dest="mode", help="Operation mode")

    generate_parser = subparsers.add_parser("generate", help="Create a new identity")
    generate_parser.add_argument(
        "-b",
        "--bits",
        type=int,
        default=2048,
        help="RSA key size in bits (default: 2048)",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="file to save the identity to instead of printing it",
    )

    show_parser = subparsers.add_parser("show", help="Print a saved identity")
    show_parser.add_argument("path", help="identity file written by 'generate'")

    inspect_parser = subparsers.add_parser("inspect", help="Decode a peer id")
    inspect_parser.add_argument("peer_id", help="peer id in base58 or hex form")

    args = parser.parse_args(argv)

    if not args.mode:
        parser.print_help()
        return 1

    try:
        if args.mode == "generate":
            return run_generate(args.bits, args.output)
        elif args.mode == "show":
            return run_show(args.path)
        elif args.mode == "inspect":
            return run_inspect(args.peer_id)
    except (BasePeerIdError, ValueError, OSError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        logger.debug("command failed", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
