# =============================================================================
# Request Signature Verification (Ed25519)
# =============================================================================
# The platform signs timestamp ++ body with its Ed25519 key:
#
#   signed = X-Signature-Timestamp (utf-8 bytes) + raw body bytes
#
# No separator, timestamp first. The signature header is base64.
# Verification must happen before the body is parsed.
# =============================================================================

import binascii
import logging
from typing import Optional, Tuple, Union

import nacl.encoding
import nacl.exceptions
import nacl.signing

from lambda_interactions.errors import ConfigurationError
from lambda_interactions.runtime.parse_event import b64decode_strict

logger = logging.getLogger(__name__)

PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64

PublicKeyLike = Union[nacl.signing.VerifyKey, bytes, str]


def load_verify_key(public_key: PublicKeyLike) -> nacl.signing.VerifyKey:
    """
    Build a VerifyKey from raw bytes, a hex string, or an existing VerifyKey.

    Raises:
        ConfigurationError: the key is missing or not a 32-byte Ed25519 key
    """
    if public_key is None:
        raise ConfigurationError("Public key is not set, please set up your public key")
    if isinstance(public_key, nacl.signing.VerifyKey):
        return public_key
    try:
        if isinstance(public_key, str):
            return nacl.signing.VerifyKey(public_key.strip().encode("ascii"), encoder=nacl.encoding.HexEncoder)
        if isinstance(public_key, (bytes, bytearray)):
            return nacl.signing.VerifyKey(bytes(public_key))
    except (ValueError, TypeError, UnicodeEncodeError, nacl.exceptions.CryptoError) as e:
        raise ConfigurationError(f"Invalid Ed25519 public key: {e}")
    raise ConfigurationError(f"Unsupported public key type {type(public_key).__name__}")


def decode_signature(header_value: str) -> Optional[bytes]:
    """Decode the base64 signature header. None when it is not valid base64."""
    try:
        return b64decode_strict(header_value)
    except (binascii.Error, UnicodeEncodeError):
        return None


def build_signed_message(timestamp: str, body: bytes) -> bytes:
    """Exact byte sequence covered by the signature."""
    return timestamp.encode("utf-8") + body


def verify_signature(
    verify_key: nacl.signing.VerifyKey, timestamp: str, body: bytes, signature: bytes
) -> Tuple[bool, str]:
    """
    Verify an interaction signature.

    Returns: (is_valid, error_message)
    """
    if len(signature) != SIGNATURE_SIZE:
        return False, f"Signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}"

    try:
        message = build_signed_message(timestamp, body)
    except UnicodeEncodeError:
        return False, "Timestamp is not valid UTF-8"

    try:
        verify_key.verify(message, signature)
    except nacl.exceptions.BadSignatureError:
        return False, "Signature mismatch"
    except (ValueError, TypeError) as e:
        # libsodium rejects some malformed signatures before comparing
        return False, f"Malformed signature: {e}"

    return True, ""
