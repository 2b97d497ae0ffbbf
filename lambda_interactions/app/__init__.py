# =============================================================================
# Application Entry Points
# =============================================================================
# Function wraps the verify/dispatch pipeline; lambda_handler is a ready-made
# entry point serving DEFAULT_MUX.
# =============================================================================

from lambda_interactions.app.function import Function, lambda_handler, start

__all__ = [
    "Function",
    "lambda_handler",
    "start",
]
