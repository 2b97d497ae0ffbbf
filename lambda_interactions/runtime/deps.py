# =============================================================================
# Configuration & Dependencies
# =============================================================================
# Settings come from environment variables. The public key can be given
# directly (INTERACTIONS_PUBLIC_KEY, hex) or stored in SSM Parameter Store
# (INTERACTIONS_PUBLIC_KEY_PARAMETER); the SSM client is created lazily so
# the module imports without AWS credentials.
# =============================================================================

import logging
import os
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lambda_interactions.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PUBLIC_KEY = "INTERACTIONS_PUBLIC_KEY"
ENV_PUBLIC_KEY_PARAMETER = "INTERACTIONS_PUBLIC_KEY_PARAMETER"
ENV_CASE_INSENSITIVE_HEADERS = "INTERACTIONS_CASE_INSENSITIVE_HEADERS"


def _get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _get_env_bool(key: str, default: bool = False) -> bool:
    return _get_env(key, str(default)).lower() == "true"


@dataclass
class Deps:
    """
    Settings and lazily created AWS clients.

    Usage:
        deps = create_deps()
        key = load_public_key(deps)
    """
    region: str = field(default_factory=lambda: os.environ.get("AWS_REGION", "us-east-1"))

    @cached_property
    def ssm(self):
        """SSM client (Parameter Store)."""
        return boto3.client("ssm", region_name=self.region)

    @cached_property
    def config(self) -> Dict[str, Any]:
        """Environment configuration."""
        return {
            ENV_PUBLIC_KEY: _get_env(ENV_PUBLIC_KEY).strip(),
            ENV_PUBLIC_KEY_PARAMETER: _get_env(ENV_PUBLIC_KEY_PARAMETER).strip(),
            ENV_CASE_INSENSITIVE_HEADERS: _get_env_bool(ENV_CASE_INSENSITIVE_HEADERS),
            "LOG_LEVEL": (_get_env("LOG_LEVEL") or "INFO").upper(),
        }

    def get_parameter(self, name: str) -> str:
        """Read a (possibly SecureString) parameter from Parameter Store."""
        try:
            response = self.ssm.get_parameter(Name=name, WithDecryption=True)
        except (ClientError, BotoCoreError) as e:
            raise ConfigurationError(f"Failed to read SSM parameter {name}: {e}", details={"parameter": name})
        return response["Parameter"]["Value"].strip()


def configure_logging(deps: Deps) -> None:
    """
    Apply LOG_LEVEL to the package loggers.

    Raises:
        ConfigurationError: LOG_LEVEL is not a logging level name
    """
    level = deps.config["LOG_LEVEL"]
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown LOG_LEVEL {level!r}", details={"LOG_LEVEL": level})
    logging.getLogger("lambda_interactions").setLevel(level)


def create_deps(region: str = None) -> Deps:
    """Create a new Deps instance."""
    return Deps(region=region or os.environ.get("AWS_REGION", "us-east-1"))


def load_public_key(deps: Optional[Deps] = None) -> str:
    """
    Resolve the hex-encoded public key from configuration.

    INTERACTIONS_PUBLIC_KEY wins; otherwise INTERACTIONS_PUBLIC_KEY_PARAMETER
    names an SSM parameter to fetch.

    Raises:
        ConfigurationError: neither is set, or the parameter cannot be read
    """
    if deps is None:
        deps = create_deps()

    key = deps.config[ENV_PUBLIC_KEY]
    if key:
        return key

    parameter = deps.config[ENV_PUBLIC_KEY_PARAMETER]
    if parameter:
        logger.info(f"Loading public key from SSM parameter {parameter}")
        key = deps.get_parameter(parameter)
        if key:
            return key

    raise ConfigurationError(
        f"No public key configured; set {ENV_PUBLIC_KEY} or {ENV_PUBLIC_KEY_PARAMETER}"
    )
