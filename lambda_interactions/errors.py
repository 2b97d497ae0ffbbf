# =============================================================================
# Error Types
# =============================================================================
# Authentication failures are never raised; they become a 401 result.
# Everything below propagates out of the Lambda invocation.
#
#   EnvelopeError / PayloadError   - bad input that passed the transport
#   ConfigurationError / Registration / Routing / HandlerError
#                                  - deployment mistakes, must crash loudly
# =============================================================================

from typing import Any, Dict, Optional


class InteractionsError(Exception):
    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class EnvelopeError(InteractionsError):
    """The delivery envelope itself could not be decoded."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("envelope_error", message, details)


class PayloadError(InteractionsError):
    """A signed body that does not parse as an interaction."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("payload_error", message, details)


class ConfigurationError(InteractionsError):
    def __init__(self, message: str, code: str = "configuration_error", details: Optional[Dict[str, Any]] = None):
        super().__init__(code, message, details)


class RegistrationError(ConfigurationError):
    """Duplicate key, missing handler, or registering over a custom handler."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="registration_error", details=details)


class RoutingError(InteractionsError):
    """No handler can be selected for an interaction."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("routing_error", message, details)


class HandlerError(InteractionsError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("handler_error", message, details)
