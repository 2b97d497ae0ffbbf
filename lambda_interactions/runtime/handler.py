# =============================================================================
# Handler Contract
# =============================================================================
# A handler takes (context, interaction) and returns a response.
# Objects with a `handle` method and plain functions are both accepted;
# functions are wrapped in HandlerFunc on registration.
# =============================================================================

from typing import Any, Callable, Dict, Optional, Union

from lambda_interactions.errors import HandlerError
from lambda_interactions.runtime.interaction import Interaction, InteractionResponse


# Type definitions
Response = Union[InteractionResponse, Dict[str, Any]]
HandlerCallable = Callable[[Any, Interaction], Response]


class Handler:
    """Handles and responds to interactions."""

    def handle(self, context: Any, interaction: Interaction) -> Response:
        raise NotImplementedError


class HandlerFunc(Handler):
    """Handler that calls the wrapped function."""

    def __init__(self, func: HandlerCallable):
        self.func = func
        # Preserve metadata for logs and route listings
        self.__name__ = getattr(func, "__name__", type(func).__name__)
        self.__doc__ = func.__doc__

    def handle(self, context: Any, interaction: Interaction) -> Response:
        return self.func(context, interaction)

    def __call__(self, context: Any, interaction: Interaction) -> Response:
        return self.func(context, interaction)

    def __repr__(self) -> str:
        return f"HandlerFunc({self.__name__})"


def as_handler(obj: Any) -> Optional[Handler]:
    """Coerce a handler object or function into a Handler. None stays None."""
    if obj is None:
        return None
    if isinstance(obj, Handler):
        return obj
    if callable(getattr(obj, "handle", None)):
        return obj
    if callable(obj):
        return HandlerFunc(obj)
    raise TypeError(f"Not a handler: {obj!r}")


def response_to_dict(response: Any) -> Dict[str, Any]:
    """Serialize a handler result. Dicts pass through unmodified."""
    if isinstance(response, InteractionResponse):
        return response.to_dict()
    if isinstance(response, dict):
        return response
    raise HandlerError(
        f"Handler returned {type(response).__name__}, expected InteractionResponse or dict"
    )


def default_ping_handler_func(context: Any, interaction: Interaction) -> InteractionResponse:
    """Responds to pings with pongs."""
    return InteractionResponse.pong()


DEFAULT_PING_HANDLER = HandlerFunc(default_ping_handler_func)
