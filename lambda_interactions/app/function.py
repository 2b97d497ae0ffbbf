# =============================================================================
# Lambda Function - Verify, Parse, Dispatch
# =============================================================================
# One pass per invocation:
#   headers -> signature check -> parse interaction -> handler -> result
#
# Authentication failures come back as a 401 result and are never raised.
# Malformed envelopes, unparseable signed payloads and routing/config
# mistakes raise and fail the invocation.
# =============================================================================

import logging
from typing import Any, Dict, Optional

import nacl.signing

from lambda_interactions.runtime.deps import (
    ENV_CASE_INSENSITIVE_HEADERS,
    Deps,
    configure_logging,
    create_deps,
    load_public_key,
)
from lambda_interactions.runtime.dispatch import DEFAULT_MUX
from lambda_interactions.runtime.envelope import STATUS_OK, DeliveryEnvelope, DeliveryResult
from lambda_interactions.runtime.handler import as_handler, response_to_dict
from lambda_interactions.runtime.interaction import Interaction, type_name
from lambda_interactions.runtime.parse_event import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    decode_body,
    detect_event_source,
    get_header,
)
from lambda_interactions.runtime.verify import PublicKeyLike, decode_signature, load_verify_key, verify_signature

# ---------- Logger ----------
logger = logging.getLogger(__name__)


class Function:
    """
    Handles interactions received as AWS Lambda events.

    Attributes:
        public_key: The application's Ed25519 public key (hex, raw bytes or VerifyKey)
        handler: Handles verified interactions; DEFAULT_MUX when None
        case_insensitive_headers: Fall back to case-folded header lookup

    Usage:
        mux = Mux()
        mux.register_command_func("hello", hello)
        handler = Function(public_key=PUBLIC_KEY, handler=mux).start()
    """

    def __init__(
        self,
        public_key: Optional[PublicKeyLike] = None,
        handler: Any = None,
        case_insensitive_headers: bool = False,
    ):
        self.public_key = public_key
        self.handler = handler
        self.case_insensitive_headers = case_insensitive_headers
        self._verify_key: Optional[nacl.signing.VerifyKey] = None

    @property
    def verify_key(self) -> nacl.signing.VerifyKey:
        if self._verify_key is None:
            self._verify_key = load_verify_key(self.public_key)
        return self._verify_key

    def start(self) -> "Function":
        """
        Validate configuration and return self, ready to be the Lambda handler.

        Raises:
            ConfigurationError: public key is missing or malformed
        """
        self._verify_key = load_verify_key(self.public_key)
        if self.handler is None:
            self.handler = DEFAULT_MUX
        return self

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def __call__(self, event: Dict[str, Any], context: Any) -> Dict[str, Any]:
        """AWS Lambda entry point (runtime passes a decoded event)."""
        return self.handle_event(event, context).to_dict()

    def invoke(self, context: Any, event_data: Any) -> bytes:
        """Read raw event bytes, verify, dispatch, and return the JSON result."""
        envelope = DeliveryEnvelope.from_json(event_data)
        return self.invoke_envelope(context, envelope).to_json()

    def handle_event(self, event: Any, context: Any) -> DeliveryResult:
        """Run one verification and dispatch pass over a decoded event."""
        logger.debug(f"Received event source={detect_event_source(event)}")
        return self.invoke_envelope(context, DeliveryEnvelope.from_event(event))

    def invoke_envelope(self, context: Any, envelope: DeliveryEnvelope) -> DeliveryResult:
        headers = envelope.headers
        ci = self.case_insensitive_headers

        signature_header = get_header(headers, SIGNATURE_HEADER, ci)
        if signature_header is None:
            return self._reject(f"missing {SIGNATURE_HEADER} header")
        signature = decode_signature(signature_header)
        if signature is None:
            return self._reject(f"{SIGNATURE_HEADER} is not valid base64")

        timestamp = get_header(headers, TIMESTAMP_HEADER, ci)
        if timestamp is None:
            return self._reject(f"missing {TIMESTAMP_HEADER} header")

        # transport defect, not a forged request: raises EnvelopeError
        body = decode_body(envelope)

        valid, error = verify_signature(self.verify_key, timestamp, body, signature)
        if not valid:
            return self._reject(error)

        # signed by the platform, so a parse failure is ours to surface
        interaction = Interaction.from_json(body)

        handler = as_handler(self.handler)
        if handler is None:
            handler = DEFAULT_MUX

        key = interaction.command_name or interaction.custom_id
        logger.info(f"Dispatching type={type_name(interaction.type)} key={key!r} id={interaction.id}")

        response = handler.handle(context, interaction)
        return DeliveryResult(status_code=STATUS_OK, response=response_to_dict(response))

    def _reject(self, reason: str) -> DeliveryResult:
        logger.warning(f"Rejected interaction request: {reason}")
        return DeliveryResult.unauthorized()


def start(public_key: Optional[PublicKeyLike] = None, handler: Any = None, deps: Optional[Deps] = None) -> Function:
    """
    Build a started Function.

    The public key is loaded from configuration when not given, and
    DEFAULT_MUX handles interactions when no handler is given.

    Raises:
        ConfigurationError: LOG_LEVEL or the public key is invalid
    """
    if deps is None:
        deps = create_deps()
    configure_logging(deps)
    if public_key is None:
        public_key = load_public_key(deps)
    return Function(
        public_key=public_key,
        handler=handler,
        case_insensitive_headers=deps.config[ENV_CASE_INSENSITIVE_HEADERS],
    ).start()


_default_function: Optional[Function] = None


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Ready-made Lambda handler ("lambda_interactions.app.lambda_handler").

    Serves DEFAULT_MUX with the key from configuration. Import the module that
    registers your handlers before the first invocation.
    """
    global _default_function
    if _default_function is None:
        _default_function = start()
    return _default_function(event, context)

