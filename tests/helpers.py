"""Shared helpers for signing test envelopes."""

import base64
import json
from typing import Any, Dict, Optional

import nacl.signing

SIGNING_KEY = nacl.signing.SigningKey(b"\x01" * 32)
PUBLIC_KEY = bytes(SIGNING_KEY.verify_key)
PUBLIC_KEY_HEX = PUBLIC_KEY.hex()
TIMESTAMP = "1700000000"


def sign(timestamp: str, body: bytes, key: nacl.signing.SigningKey = SIGNING_KEY) -> bytes:
    return key.sign(timestamp.encode("utf-8") + body).signature


def make_event(
    payload: Any = None,
    body: Optional[bytes] = None,
    timestamp: str = TIMESTAMP,
    encode_body: bool = True,
    signature: Optional[bytes] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Signed delivery envelope for a payload (or raw body bytes)."""
    if body is None:
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    if signature is None:
        signature = sign(timestamp, body)
    if headers is None:
        headers = {
            "X-Signature-Ed25519": base64.b64encode(signature).decode("ascii"),
            "X-Signature-Timestamp": timestamp,
        }
    return {
        "body": base64.b64encode(body).decode("ascii") if encode_body else body.decode("utf-8"),
        "headers": headers,
        "isBase64Encoded": encode_body,
    }


def command(name: str, **extra: Any) -> Dict[str, Any]:
    return {"id": "int-1", "type": 2, "token": "tok", "data": {"id": "cmd-1", "name": name}, **extra}


def component(custom_id: str) -> Dict[str, Any]:
    return {"id": "int-2", "type": 3, "data": {"custom_id": custom_id, "component_type": 2}}


def autocomplete(name: str) -> Dict[str, Any]:
    return {"id": "int-3", "type": 4, "data": {"name": name, "options": []}}


def modal(custom_id: str) -> Dict[str, Any]:
    return {"id": "int-4", "type": 5, "data": {"custom_id": custom_id, "components": []}}
