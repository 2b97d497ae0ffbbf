# =============================================================================
# Runtime Package - Verification and Dispatch
# =============================================================================
# - interaction:  parsed platform events and responses
# - handler:      handler contract and function adapter
# - registry:     insert-only keyed handler table
# - dispatch:     typed sub-routers, Mux, DEFAULT_MUX
# - envelope:     Lambda delivery envelope and result
# - parse_event:  header lookup and body decoding
# - verify:       Ed25519 signature verification
# - deps:         configuration and AWS clients
# =============================================================================

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
)
from lambda_interactions.runtime.envelope import DeliveryEnvelope, DeliveryResult
from lambda_interactions.runtime.deps import Deps, configure_logging, create_deps, load_public_key

__all__ = [
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
    "DeliveryEnvelope",
    "DeliveryResult",
    "Deps",
    "configure_logging",
    "create_deps",
    "load_public_key",
]
