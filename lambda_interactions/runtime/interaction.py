# =============================================================================
# Interaction - Parsed Platform Event
# =============================================================================
# The platform owns the payload schema. Only the kind discriminant and the
# two routing keys (command name, custom_id) are interpreted here; the rest
# of the object travels untouched in `raw`.
# =============================================================================

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional, Union

from lambda_interactions.errors import PayloadError


class InteractionType(IntEnum):
    """Kinds of interactions the platform delivers."""
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType(IntEnum):
    """Callback types accepted in an interaction response."""
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    MODAL = 9


def type_name(value: int) -> str:
    """Readable name for an interaction type, including unknown values."""
    try:
        return InteractionType(value).name
    except ValueError:
        return f"UNKNOWN({value})"


@dataclass
class Interaction:
    """
    A single interaction event.

    Attributes:
        type: Raw kind value; values outside InteractionType are kept as-is
        data: Kind-specific payload (empty for pings)
        raw: The full decoded JSON object, unmodified
    """
    type: int
    data: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> Optional[InteractionType]:
        """InteractionType member, or None when the platform sent a new kind."""
        try:
            return InteractionType(self.type)
        except ValueError:
            return None

    @property
    def command_name(self) -> str:
        """Command name for APPLICATION_COMMAND and autocomplete interactions."""
        return self.data.get("name", "") or ""

    @property
    def custom_id(self) -> str:
        """custom_id for MESSAGE_COMPONENT and MODAL_SUBMIT interactions."""
        return self.data.get("custom_id", "") or ""

    @property
    def id(self) -> str:
        return self.raw.get("id", "") or ""

    @property
    def token(self) -> str:
        return self.raw.get("token", "") or ""

    @property
    def application_id(self) -> str:
        return self.raw.get("application_id", "") or ""

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level field from the raw payload."""
        return self.raw.get(key, default)

    @classmethod
    def from_dict(cls, payload: Any) -> "Interaction":
        """Build an Interaction from a decoded JSON value."""
        if not isinstance(payload, dict):
            raise PayloadError(f"Interaction must be a JSON object, got {type(payload).__name__}")

        kind = payload.get("type")
        # bool is an int subclass; true/false is not a kind
        if not isinstance(kind, int) or isinstance(kind, bool):
            raise PayloadError("Interaction is missing an integer 'type'", {"type": kind})

        data = payload.get("data")
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise PayloadError("Interaction 'data' must be an object", {"type": kind})

        return cls(type=kind, data=data, raw=payload)

    @classmethod
    def from_json(cls, body: Union[bytes, str]) -> "Interaction":
        """Parse a raw request body."""
        try:
            payload = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise PayloadError(f"Interaction body is not valid JSON: {e}")
        return cls.from_dict(payload)


@dataclass
class InteractionResponse:
    """Response returned by a handler and sent back to the platform."""
    type: int
    data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": int(self.type)}
        if self.data is not None:
            result["data"] = self.data
        return result

    @classmethod
    def pong(cls) -> "InteractionResponse":
        return cls(type=InteractionResponseType.PONG)

    @classmethod
    def message(cls, content: str, ephemeral: bool = False, **fields: Any) -> "InteractionResponse":
        """CHANNEL_MESSAGE_WITH_SOURCE with the given content."""
        data: Dict[str, Any] = {"content": content, **fields}
        if ephemeral:
            data["flags"] = data.get("flags", 0) | 64
        return cls(type=InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE, data=data)

    @classmethod
    def autocomplete(cls, choices: list) -> "InteractionResponse":
        return cls(
            type=InteractionResponseType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT,
            data={"choices": choices},
        )
