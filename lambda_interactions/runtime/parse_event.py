# =============================================================================
# Event Parser - Headers and Body of a Delivery Envelope
# =============================================================================

import base64
import binascii
from typing import Any, Dict, Optional

from lambda_interactions.errors import EnvelopeError
from lambda_interactions.runtime.envelope import DeliveryEnvelope


SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"


class EventSource:
    """Event source identifiers (for logging only)."""
    API_GATEWAY = "api_gateway"
    DIRECT = "direct"
    UNKNOWN = "unknown"


def detect_event_source(event: Any) -> str:
    """
    Detect where a Lambda event came from.

    API Gateway (REST v1, HTTP v2) and function URLs carry a requestContext;
    anything else with a body is treated as a direct invoke.
    """
    if not isinstance(event, dict) or not event:
        return EventSource.UNKNOWN
    request_context = event.get("requestContext")
    if isinstance(request_context, dict) and ("http" in request_context or "httpMethod" in request_context):
        return EventSource.API_GATEWAY
    if "body" in event:
        return EventSource.DIRECT
    return EventSource.UNKNOWN


def get_header(headers: Dict[str, str], name: str, case_insensitive: bool = False) -> Optional[str]:
    """
    Look up a header value.

    Exact-case match first. With case_insensitive, falls back to a
    case-folded match for transports that lower-case header names.
    """
    if name in headers:
        return headers[name]
    if case_insensitive:
        folded = name.lower()
        for key, value in headers.items():
            if key.lower() == folded:
                return value
    return None


def b64decode_strict(value: str) -> bytes:
    """Standard alphabet, padding required. Raises binascii.Error."""
    return base64.b64decode(value.encode("ascii"), validate=True)


def decode_body(envelope: DeliveryEnvelope) -> bytes:
    """
    Raw body bytes of the envelope.

    Raises:
        EnvelopeError: body does not decode to bytes
    """
    if not envelope.is_base64_encoded:
        try:
            return envelope.body.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EnvelopeError(f"Body is not valid UTF-8 text: {e}")
    try:
        return b64decode_strict(envelope.body)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise EnvelopeError(f"Body is flagged isBase64Encoded but does not decode: {e}")
