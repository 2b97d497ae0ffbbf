# =============================================================================
# Delivery Envelope - Lambda Event In, Result Out
# =============================================================================
# Inbound:  {"body": str, "headers": {...}, "isBase64Encoded": bool}
# Outbound: {"statusCode": 200|401, "body": <interaction response>}
#           ("body" only present when a handler ran)
# =============================================================================

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from lambda_interactions.errors import EnvelopeError

STATUS_OK = 200
STATUS_UNAUTHORIZED = 401


@dataclass
class DeliveryEnvelope:
    """
    Transport wrapper handed over by the Lambda runtime.

    Attributes:
        body: Raw request body, base64 text when is_base64_encoded is set
        headers: Request headers as delivered
        is_base64_encoded: Whether body must be base64-decoded
    """
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    is_base64_encoded: bool = False

    @classmethod
    def from_event(cls, event: Any) -> "DeliveryEnvelope":
        """Create envelope from a decoded Lambda event."""
        if not isinstance(event, dict):
            raise EnvelopeError(f"Event must be a JSON object, got {type(event).__name__}")

        body = event.get("body")
        if body is None:
            body = ""
        if not isinstance(body, str):
            raise EnvelopeError("Event 'body' must be a string")

        headers = event.get("headers") or {}
        if not isinstance(headers, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in headers.items()
        ):
            raise EnvelopeError("Event 'headers' must map strings to strings")

        encoded = event.get("isBase64Encoded", False)
        if encoded is None:
            encoded = False
        if not isinstance(encoded, bool):
            raise EnvelopeError("Event 'isBase64Encoded' must be a boolean")

        return cls(body=body, headers=headers, is_base64_encoded=encoded)

    @classmethod
    def from_json(cls, event_data: Any) -> "DeliveryEnvelope":
        """Create envelope from raw event bytes."""
        try:
            event = json.loads(event_data)
        except (TypeError, ValueError, UnicodeDecodeError) as e:
            raise EnvelopeError(f"Event is not valid JSON: {e}")
        return cls.from_event(event)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "body": self.body,
            "headers": self.headers,
            "isBase64Encoded": self.is_base64_encoded,
        }


@dataclass
class DeliveryResult:
    """Result returned to the Lambda runtime."""
    status_code: int
    response: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status_code == STATUS_OK

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"statusCode": self.status_code}
        if self.response is not None:
            result["body"] = self.response
        return result

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict(), ensure_ascii=False).encode("utf-8")

    @classmethod
    def unauthorized(cls) -> "DeliveryResult":
        return cls(status_code=STATUS_UNAUTHORIZED)
