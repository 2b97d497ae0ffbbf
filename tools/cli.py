#!/usr/bin/env python3
# =============================================================================
# CLI Tool for Interaction Functions
# =============================================================================
# Developer tooling for local testing. Signs interactions with a local key
# and runs them through the same Function used in Lambda.
#
# Usage:
#   python tools/cli.py keygen
#   python tools/cli.py sign --private-key <hex> --file interaction.json
#   python tools/cli.py invoke --app myapp:mux --private-key <hex> --json '{"type": 1}'
#   python tools/cli.py routes --app myapp:mux --describe
# =============================================================================

import argparse
import base64
import importlib
import json
import sys
import os
import time
from typing import Any, Dict, Optional, Tuple

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import nacl.encoding
import nacl.signing

from lambda_interactions.app.function import Function
from lambda_interactions.runtime.dispatch import DEFAULT_MUX, Mux
from lambda_interactions.runtime.envelope import DeliveryEnvelope
from lambda_interactions.runtime.parse_event import SIGNATURE_HEADER, TIMESTAMP_HEADER
from lambda_interactions.runtime.verify import build_signed_message


def generate_keypair() -> Tuple[str, str]:
    """Return (private_key_hex, public_key_hex)."""
    signing_key = nacl.signing.SigningKey.generate()
    private_hex = signing_key.encode(encoder=nacl.encoding.HexEncoder).decode("ascii")
    public_hex = signing_key.verify_key.encode(encoder=nacl.encoding.HexEncoder).decode("ascii")
    return private_hex, public_hex


def sign_interaction(
    private_key_hex: str, body: str, timestamp: Optional[str] = None, encode_body: bool = True
) -> Dict[str, Any]:
    """Build a signed delivery envelope for an interaction body."""
    if timestamp is None:
        timestamp = str(int(time.time()))
    signing_key = nacl.signing.SigningKey(private_key_hex.encode("ascii"), encoder=nacl.encoding.HexEncoder)
    raw = body.encode("utf-8")
    signature = signing_key.sign(build_signed_message(timestamp, raw)).signature
    envelope = DeliveryEnvelope(
        body=base64.b64encode(raw).decode("ascii") if encode_body else body,
        headers={
            SIGNATURE_HEADER: base64.b64encode(signature).decode("ascii"),
            TIMESTAMP_HEADER: timestamp,
        },
        is_base64_encoded=encode_body,
    )
    return envelope.to_dict()


def load_app(target: str) -> Any:
    """Import "module:attribute" and return the attribute."""
    module_name, _, attr = target.partition(":")
    module = importlib.import_module(module_name)
    return getattr(module, attr or "mux")


def _read_body(args: argparse.Namespace) -> str:
    if args.file:
        with open(args.file, "r") as f:
            return f.read()
    if args.json:
        return args.json
    raise SystemExit("Provide --file or --json with the interaction body")


def _print(data: Any, pretty: bool) -> None:
    if pretty:
        print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
    else:
        print(json.dumps(data, ensure_ascii=False, default=str))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Interaction Function CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s keygen
  %(prog)s sign --private-key <hex> --json '{"type": 1}'
  %(prog)s invoke --app myapp:mux --private-key <hex> --file command.json --pretty
  %(prog)s routes --app myapp:mux --describe
        """
    )
    parser.add_argument("--pretty", "-p", action="store_true", help="Pretty print output")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("keygen", help="Generate an Ed25519 key pair")

    for name in ("sign", "invoke"):
        p = sub.add_parser(name, help=f"{name.capitalize()} an interaction body")
        p.add_argument("--private-key", "-k", required=True, help="Hex-encoded Ed25519 private key")
        p.add_argument("--json", "-j", help="Interaction JSON")
        p.add_argument("--file", "-f", help="JSON file to load the interaction from")
        p.add_argument("--timestamp", "-t", help="Timestamp header (default: now)")
        p.add_argument("--raw", action="store_true", help="Send body as text instead of base64")
        if name == "invoke":
            p.add_argument("--app", "-a", help="module:attribute of a Mux, handler or Function")

    p = sub.add_parser("routes", help="List registered routes")
    p.add_argument("--app", "-a", required=True, help="module:attribute of a Mux or Function")
    p.add_argument("--describe", "-d", action="store_true", help="Show handler descriptions")

    args = parser.parse_args(argv)

    if args.command == "keygen":
        private_hex, public_hex = generate_keypair()
        _print({"privateKey": private_hex, "publicKey": public_hex}, args.pretty)
        return 0

    if args.command == "sign":
        envelope = sign_interaction(args.private_key, _read_body(args), args.timestamp, not args.raw)
        _print(envelope, args.pretty)
        return 0

    if args.command == "invoke":
        envelope = sign_interaction(args.private_key, _read_body(args), args.timestamp, not args.raw)
        signing_key = nacl.signing.SigningKey(args.private_key.encode("ascii"), encoder=nacl.encoding.HexEncoder)
        app = load_app(args.app) if args.app else None
        handler = app.handler if isinstance(app, Function) else app
        function = Function(public_key=bytes(signing_key.verify_key), handler=handler).start()
        result = function.handle_event(envelope, None)
        _print(result.to_dict(), args.pretty)
        return 0 if result.ok else 1

    if args.command == "routes":
        app = load_app(args.app)
        if isinstance(app, Function):
            app = app.handler if app.handler is not None else DEFAULT_MUX
        if not isinstance(app, Mux):
            raise SystemExit(f"{args.app} is not a Mux")
        _print(app.list_routes(describe=args.describe), args.pretty)
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
