# =============================================================================
# Interaction Dispatcher
# =============================================================================
# Mux switches on interaction kind. Commands, autocomplete, components and
# modals are usually backed by a keyed sub-router; pings fall back to a
# built-in pong.
#
# Anything that cannot be routed raises RoutingError. There is no fallback
# handler: an unknown command or custom_id means the deployed handlers and
# the live command set disagree, and the operator has to fix that.
# =============================================================================

import logging
from typing import Any, Dict

from lambda_interactions.errors import RegistrationError, RoutingError
from lambda_interactions.runtime.handler import (
    DEFAULT_PING_HANDLER,
    Handler,
    HandlerCallable,
    HandlerFunc,
    Response,
    as_handler,
)
from lambda_interactions.runtime.interaction import Interaction, InteractionType, type_name
from lambda_interactions.runtime.registry import Registry

logger = logging.getLogger(__name__)


# =============================================================================
# KEYED SUB-ROUTERS
# =============================================================================

class ApplicationCommandMux(Registry, Handler):
    """
    Selects handlers for application commands by command name.

    Serves both APPLICATION_COMMAND (2) and APPLICATION_COMMAND_AUTOCOMPLETE (4).
    """

    def __init__(self):
        super().__init__("ApplicationCommandMux")

    def handle(self, context: Any, interaction: Interaction) -> Response:
        if interaction.type not in (
            InteractionType.APPLICATION_COMMAND,
            InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE,
        ):
            raise RoutingError(
                f"ApplicationCommandMux asked to handle interaction of wrong type {type_name(interaction.type)}",
                {"type": interaction.type},
            )

        name = interaction.command_name
        handler = self.get(name)
        if handler is None:
            raise RoutingError(f"ApplicationCommandMux asked to handle unknown command {name!r}", {"key": name})
        return handler.handle(context, interaction)


class MessageComponentMux(Registry, Handler):
    """
    Selects handlers for MESSAGE_COMPONENT (3) interactions by custom_id.

    Only suitable when custom_id identifies the component; ids carrying
    state will not match a fixed key.
    """

    def __init__(self):
        super().__init__("MessageComponentMux")

    def handle(self, context: Any, interaction: Interaction) -> Response:
        if interaction.type != InteractionType.MESSAGE_COMPONENT:
            raise RoutingError(
                f"MessageComponentMux asked to handle interaction of wrong type {type_name(interaction.type)}",
                {"type": interaction.type},
            )

        custom_id = interaction.custom_id
        handler = self.get(custom_id)
        if handler is None:
            raise RoutingError(f"MessageComponentMux asked to handle unknown ID {custom_id!r}", {"key": custom_id})
        return handler.handle(context, interaction)


class ModalSubmitMux(Registry, Handler):
    """Selects handlers for MODAL_SUBMIT (5) interactions by custom_id."""

    def __init__(self):
        super().__init__("ModalSubmitMux")

    def handle(self, context: Any, interaction: Interaction) -> Response:
        if interaction.type != InteractionType.MODAL_SUBMIT:
            raise RoutingError(
                f"ModalSubmitMux asked to handle interaction of wrong type {type_name(interaction.type)}",
                {"type": interaction.type},
            )

        custom_id = interaction.custom_id
        handler = self.get(custom_id)
        if handler is None:
            raise RoutingError(f"ModalSubmitMux asked to handle unknown ID {custom_id!r}", {"key": custom_id})
        return handler.handle(context, interaction)


# =============================================================================
# TOP-LEVEL ROUTER
# =============================================================================

# slot attribute -> (interaction type, human label)
_SLOTS = {
    InteractionType.APPLICATION_COMMAND: ("application_command_handler", "application command"),
    InteractionType.MESSAGE_COMPONENT: ("message_component_handler", "message component"),
    InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE: (
        "application_command_autocomplete_handler", "application command autocomplete",
    ),
    InteractionType.MODAL_SUBMIT: ("modal_submit_handler", "modal submit"),
}


class Mux(Handler):
    """
    Routes interactions to handlers based on their type.

    Attributes:
        ping_handler: PING (1); DEFAULT_PING_HANDLER is used when None
        application_command_handler: APPLICATION_COMMAND (2)
        message_component_handler: MESSAGE_COMPONENT (3)
        application_command_autocomplete_handler: APPLICATION_COMMAND_AUTOCOMPLETE (4)
        modal_submit_handler: MODAL_SUBMIT (5)

    The register_* helpers set up keyed sub-routers in the matching slot.
    Assign a slot directly to take over routing for that kind.
    """

    def __init__(
        self,
        ping_handler: Any = None,
        application_command_handler: Any = None,
        message_component_handler: Any = None,
        application_command_autocomplete_handler: Any = None,
        modal_submit_handler: Any = None,
    ):
        self.ping_handler = as_handler(ping_handler)
        self.application_command_handler = as_handler(application_command_handler)
        self.message_component_handler = as_handler(message_component_handler)
        self.application_command_autocomplete_handler = as_handler(application_command_autocomplete_handler)
        self.modal_submit_handler = as_handler(modal_submit_handler)

    def handle(self, context: Any, interaction: Interaction) -> Response:
        """
        Forward to the handler for the interaction's type.

        Raises:
            RoutingError: the type has no handler (other than PING) or is unknown
        """
        if interaction.type == InteractionType.PING:
            handler = as_handler(self.ping_handler)
            if handler is None:
                handler = DEFAULT_PING_HANDLER
            return handler.handle(context, interaction)

        slot = _SLOTS.get(interaction.kind) if interaction.kind is not None else None
        if slot is None:
            raise RoutingError(
                f"Mux asked to handle interaction of unknown type {type_name(interaction.type)}",
                {"type": interaction.type},
            )

        attr, label = slot
        handler = as_handler(getattr(self, attr))
        if handler is None:
            raise RoutingError(
                f"Mux asked to handle {label} interaction but {attr} is not set",
                {"type": interaction.type},
            )
        logger.debug(f"Mux routing {type_name(interaction.type)} to {handler!r}")
        return handler.handle(context, interaction)

    # -------------------------------------------------------------------------
    # Registration helpers
    # -------------------------------------------------------------------------

    def _keyed(self, attr: str, mux_cls: type) -> Registry:
        current = getattr(self, attr)
        if current is None:
            current = mux_cls()
            setattr(self, attr, current)
        # exact type: a subclass may route differently
        if type(current) is not mux_cls:
            raise RegistrationError(
                f"Cannot register into {attr}: it holds {type(current).__name__}, not {mux_cls.__name__}",
                {"slot": attr},
            )
        return current

    def register_command(self, name: str, handler: Any) -> None:
        """Register the handler for APPLICATION_COMMAND interactions with the given name."""
        self._keyed("application_command_handler", ApplicationCommandMux).register(name, handler)

    def register_command_func(self, name: str, func: HandlerCallable) -> None:
        self._keyed("application_command_handler", ApplicationCommandMux).register_func(name, func)

    def register_command_autocomplete(self, name: str, handler: Any) -> None:
        """Register the handler for APPLICATION_COMMAND_AUTOCOMPLETE interactions with the given name."""
        self._keyed("application_command_autocomplete_handler", ApplicationCommandMux).register(name, handler)

    def register_command_autocomplete_func(self, name: str, func: HandlerCallable) -> None:
        self._keyed("application_command_autocomplete_handler", ApplicationCommandMux).register_func(name, func)

    def register_component(self, custom_id: str, handler: Any) -> None:
        """Register the handler for MESSAGE_COMPONENT interactions with the given custom_id."""
        self._keyed("message_component_handler", MessageComponentMux).register(custom_id, handler)

    def register_component_func(self, custom_id: str, func: HandlerCallable) -> None:
        self._keyed("message_component_handler", MessageComponentMux).register_func(custom_id, func)

    def register_modal(self, custom_id: str, handler: Any) -> None:
        """Register the handler for MODAL_SUBMIT interactions with the given custom_id."""
        self._keyed("modal_submit_handler", ModalSubmitMux).register(custom_id, handler)

    def register_modal_func(self, custom_id: str, func: HandlerCallable) -> None:
        self._keyed("modal_submit_handler", ModalSubmitMux).register_func(custom_id, func)

    # Decorators

    def command(self, name: str):
        """
        Decorator to register a command handler.

        Usage:
            @mux.command("hello")
            def hello(ctx, interaction):
                return InteractionResponse.message("Hello!")
        """
        def decorator(func: HandlerCallable) -> HandlerCallable:
            self.register_command_func(name, func)
            return func
        return decorator

    def autocomplete(self, name: str):
        def decorator(func: HandlerCallable) -> HandlerCallable:
            self.register_command_autocomplete_func(name, func)
            return func
        return decorator

    def component(self, custom_id: str):
        def decorator(func: HandlerCallable) -> HandlerCallable:
            self.register_component_func(custom_id, func)
            return func
        return decorator

    def modal(self, custom_id: str):
        def decorator(func: HandlerCallable) -> HandlerCallable:
            self.register_modal_func(custom_id, func)
            return func
        return decorator

    def list_routes(self, describe: bool = False) -> Dict[str, Any]:
        """
        Registered keys per slot.

        Keyed slots list their keys (or map them to handler descriptions
        with describe=True), custom handlers show as None, unset slots are
        omitted.
        """
        routes: Dict[str, Any] = {}
        for attr in ["ping_handler"] + [attr for attr, _ in _SLOTS.values()]:
            handler = getattr(self, attr)
            if handler is None:
                continue
            if not isinstance(handler, Registry):
                routes[attr] = None
            else:
                routes[attr] = handler.describe() if describe else handler.list_keys()
        return routes


# =============================================================================
# DEFAULT MUX
# =============================================================================
# Convenience instance for single-module apps. It is module state: register
# into it during import/setup only. Apps that want explicit ownership build
# their own Mux and pass it to Function(handler=...).

DEFAULT_MUX = Mux()


def register_command(name: str, handler: Any) -> None:
    """Register a command handler into DEFAULT_MUX."""
    DEFAULT_MUX.register_command(name, handler)


def register_command_func(name: str, func: HandlerCallable) -> None:
    DEFAULT_MUX.register_command(name, HandlerFunc(func) if func is not None else None)


def register_command_autocomplete(name: str, handler: Any) -> None:
    """Register an autocomplete handler into DEFAULT_MUX."""
    DEFAULT_MUX.register_command_autocomplete(name, handler)


def register_command_autocomplete_func(name: str, func: HandlerCallable) -> None:
    DEFAULT_MUX.register_command_autocomplete(name, HandlerFunc(func) if func is not None else None)


def register_component(custom_id: str, handler: Any) -> None:
    """Register a message component handler into DEFAULT_MUX."""
    DEFAULT_MUX.register_component(custom_id, handler)


def register_component_func(custom_id: str, func: HandlerCallable) -> None:
    DEFAULT_MUX.register_component(custom_id, HandlerFunc(func) if func is not None else None)


def register_modal(custom_id: str, handler: Any) -> None:
    """Register a modal submit handler into DEFAULT_MUX."""
    DEFAULT_MUX.register_modal(custom_id, handler)


def register_modal_func(custom_id: str, func: HandlerCallable) -> None:
    DEFAULT_MUX.register_modal(custom_id, HandlerFunc(func) if func is not None else None)
