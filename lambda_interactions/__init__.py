"""
lambda-interactions: signed interaction webhooks on AWS Lambda.

Register handlers on a Mux (or the module-level DEFAULT_MUX), then expose a
started Function as the Lambda handler:

    from lambda_interactions import Function, InteractionResponse, Mux

    mux = Mux()

    @mux.command("hello")
    def hello(ctx, interaction):
        return InteractionResponse.message("Hello!")

    handler = Function(public_key=PUBLIC_KEY, handler=mux).start()
"""

from lambda_interactions.errors import (
    ConfigurationError,
    EnvelopeError,
    HandlerError,
    InteractionsError,
    PayloadError,
    RegistrationError,
    RoutingError,
)
from lambda_interactions.runtime.interaction import (
    Interaction,
    InteractionResponse,
    InteractionResponseType,
    InteractionType,
)
from lambda_interactions.runtime.handler import DEFAULT_PING_HANDLER, Handler, HandlerFunc
from lambda_interactions.runtime.registry import Registry
from lambda_interactions.runtime.dispatch import (
    DEFAULT_MUX,
    ApplicationCommandMux,
    MessageComponentMux,
    ModalSubmitMux,
    Mux,
    register_command,
    register_command_autocomplete,
    register_command_autocomplete_func,
    register_command_func,
    register_component,
    register_component_func,
    register_modal,
    register_modal_func,
)
from lambda_interactions.runtime.envelope import DeliveryEnvelope, DeliveryResult
from lambda_interactions.app.function import Function, lambda_handler, start

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "EnvelopeError",
    "HandlerError",
    "InteractionsError",
    "PayloadError",
    "RegistrationError",
    "RoutingError",
    "Interaction",
    "InteractionResponse",
    "InteractionResponseType",
    "InteractionType",
    "DEFAULT_PING_HANDLER",
    "Handler",
    "HandlerFunc",
    "Registry",
    "DEFAULT_MUX",
    "ApplicationCommandMux",
    "MessageComponentMux",
    "ModalSubmitMux",
    "Mux",
    "register_command",
    "register_command_autocomplete",
    "register_command_autocomplete_func",
    "register_command_func",
    "register_component",
    "register_component_func",
    "register_modal",
    "register_modal_func",
    "DeliveryEnvelope",
    "DeliveryResult",
    "Function",
    "lambda_handler",
    "start",
]
