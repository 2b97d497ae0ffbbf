# =============================================================================
# Keyed Handler Registry
# =============================================================================
# Insert-only mapping from a routing key (command name or custom_id) to a
# handler. A key can be registered once; a second registration is a
# deployment bug and raises RegistrationError.
#
# Registration happens at import/setup time. Lookups during invocations
# never mutate the registry, so no locking is done.
# =============================================================================

import logging
from typing import Any, Dict, List, Optional

from lambda_interactions.errors import RegistrationError
from lambda_interactions.runtime.handler import Handler, HandlerCallable, HandlerFunc, as_handler

logger = logging.getLogger(__name__)


def _describe(key: str, handler: Any) -> Dict[str, Any]:
    desc = None
    doc = getattr(handler, "__doc__", None)
    if isinstance(handler, HandlerFunc):
        doc = handler.func.__doc__
    if doc:
        desc = doc.strip().split("\n")[0].strip()
    if not desc:
        desc = f"Handle {key}"
    func = handler.func if isinstance(handler, HandlerFunc) else handler
    return {
        "description": desc,
        "module": getattr(func, "__module__", ""),
        "function": getattr(func, "__name__", type(func).__name__),
    }


class Registry:
    """Routing key -> Handler table."""

    def __init__(self, name: str = "registry"):
        self.name = name
        self._handlers: Dict[str, Handler] = {}
        self._metadata: Dict[str, Dict[str, Any]] = {}

    def register(self, key: str, handler: Any) -> None:
        """
        Register the handler for the given key.

        Raises:
            RegistrationError: handler is None or key is already registered
        """
        if handler is None:
            raise RegistrationError(f"{self.name}: nil handler for {key!r}", {"key": key})
        if key in self._handlers:
            raise RegistrationError(f"{self.name}: multiple registrations for {key!r}", {"key": key})

        wrapped = as_handler(handler)
        self._handlers[key] = wrapped
        self._metadata[key] = _describe(key, wrapped)
        logger.debug(f"{self.name}: registered {key!r} -> {self._metadata[key]['function']}")

    def register_func(self, key: str, func: HandlerCallable) -> None:
        """Register a plain function for the given key."""
        if func is None:
            raise RegistrationError(f"{self.name}: nil handler for {key!r}", {"key": key})
        self.register(key, HandlerFunc(func))

    def route(self, key: str):
        """
        Decorator form of register_func.

        Usage:
            @registry.route("ping_button")
            def on_ping_button(ctx, interaction):
                return InteractionResponse.message("pong")
        """
        def decorator(func: HandlerCallable) -> HandlerCallable:
            self.register_func(key, func)
            return func
        return decorator

    def get(self, key: str) -> Optional[Handler]:
        return self._handlers.get(key)

    def exists(self, key: str) -> bool:
        return key in self._handlers

    def list_keys(self) -> List[str]:
        return sorted(self._handlers)

    def describe(self) -> Dict[str, str]:
        """Registered keys with one-line descriptions."""
        return {key: meta["description"] for key, meta in sorted(self._metadata.items())}

    def __contains__(self, key: str) -> bool:
        return key in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
