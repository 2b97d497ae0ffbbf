#!/usr/bin/env python3
"""
Tests for configuration loading and the ready-made Lambda handler.

Run with: pytest tests/test_config.py -v
"""
import os
import sys
from unittest.mock import MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from helpers import PUBLIC_KEY, PUBLIC_KEY_HEX, make_event

ENV_VARS = [
    "INTERACTIONS_PUBLIC_KEY",
    "INTERACTIONS_PUBLIC_KEY_PARAMETER",
    "INTERACTIONS_CASE_INSENSITIVE_HEADERS",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_REGION", "us-east-1")


@pytest.fixture(autouse=True)
def package_logger():
    import logging

    package = logging.getLogger("lambda_interactions")
    level = package.level
    yield package
    package.setLevel(level)


# =============================================================================
# TEST: Deps / load_public_key
# =============================================================================

class TestLoadPublicKey:
    """Public key resolution: env first, then SSM."""

    def test_from_env(self, monkeypatch):
        from lambda_interactions.runtime.deps import create_deps, load_public_key

        monkeypatch.setenv("INTERACTIONS_PUBLIC_KEY", f"  {PUBLIC_KEY_HEX}\n")
        deps = create_deps()
        deps.ssm = MagicMock()

        assert load_public_key(deps) == PUBLIC_KEY_HEX
        deps.ssm.get_parameter.assert_not_called()

    def test_from_ssm(self, monkeypatch):
        from lambda_interactions.runtime.deps import create_deps, load_public_key

        monkeypatch.setenv("INTERACTIONS_PUBLIC_KEY_PARAMETER", "/bot/public-key")
        deps = create_deps()
        deps.ssm = MagicMock()
        deps.ssm.get_parameter.return_value = {"Parameter": {"Name": "/bot/public-key", "Value": PUBLIC_KEY_HEX}}

        assert load_public_key(deps) == PUBLIC_KEY_HEX
        deps.ssm.get_parameter.assert_called_once_with(Name="/bot/public-key", WithDecryption=True)

    def test_ssm_error(self, monkeypatch):
        from botocore.exceptions import ClientError
        from lambda_interactions.errors import ConfigurationError
        from lambda_interactions.runtime.deps import create_deps, load_public_key

        monkeypatch.setenv("INTERACTIONS_PUBLIC_KEY_PARAMETER", "/bot/missing")
        deps = create_deps()
        deps.ssm = MagicMock()
        deps.ssm.get_parameter.side_effect = ClientError(
            {"Error": {"Code": "ParameterNotFound", "Message": "not found"}}, "GetParameter"
        )

        with pytest.raises(ConfigurationError) as exc:
            load_public_key(deps)
        assert exc.value.details == {"parameter": "/bot/missing"}

    def test_nothing_configured(self):
        from lambda_interactions.errors import ConfigurationError
        from lambda_interactions.runtime.deps import create_deps, load_public_key

        with pytest.raises(ConfigurationError, match="INTERACTIONS_PUBLIC_KEY"):
            load_public_key(create_deps())

    def test_config_flags(self, monkeypatch):
        from lambda_interactions.runtime.deps import create_deps

        monkeypatch.setenv("INTERACTIONS_CASE_INSENSITIVE_HEADERS", "TRUE")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = create_deps(region="eu-west-1").config

        assert config["INTERACTIONS_CASE_INSENSITIVE_HEADERS"] is True
        assert config["LOG_LEVEL"] == "DEBUG"


# =============================================================================
# TEST: start() / lambda_handler
# =============================================================================

class TestStart:
    """Module-level start() reads configuration."""

    def test_start_loads_key_from_env(self, monkeypatch):
        from lambda_interactions.app.function import start

        monkeypatch.setenv("INTERACTIONS_PUBLIC_KEY", PUBLIC_KEY_HEX)
        monkeypatch.setenv("INTERACTIONS_CASE_INSENSITIVE_HEADERS", "true")
        function = start()

        assert bytes(function.verify_key) == PUBLIC_KEY
        assert function.case_insensitive_headers is True

    def test_start_applies_log_level(self, monkeypatch, package_logger):
        import logging
        from lambda_interactions.app.function import start

        monkeypatch.setenv("INTERACTIONS_PUBLIC_KEY", PUBLIC_KEY_HEX)
        monkeypatch.setenv("LOG_LEVEL", "debug")
        start()

        assert package_logger.level == logging.DEBUG

    @pytest.mark.parametrize("level", ["verbose", "Level 5"])
    def test_start_with_unknown_log_level_raises(self, monkeypatch, package_logger, level):
        from lambda_interactions.app.function import start
        from lambda_interactions.errors import ConfigurationError

        monkeypatch.setenv("INTERACTIONS_PUBLIC_KEY", PUBLIC_KEY_HEX)
        monkeypatch.setenv("LOG_LEVEL", level)
        level_before = package_logger.level

        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            start()
        assert package_logger.level == level_before

    def test_empty_log_level_means_info(self, monkeypatch):
        from lambda_interactions.runtime.deps import create_deps

        monkeypatch.setenv("LOG_LEVEL", "")
        assert create_deps().config["LOG_LEVEL"] == "INFO"

    def test_start_without_configuration_raises(self):
        from lambda_interactions.app.function import start
        from lambda_interactions.errors import ConfigurationError

        with pytest.raises(ConfigurationError):
            start()

    def test_lambda_handler_serves_default_mux(self, monkeypatch):
        import lambda_interactions.app.function as function_module

        monkeypatch.setenv("INTERACTIONS_PUBLIC_KEY", PUBLIC_KEY_HEX)
        monkeypatch.setattr(function_module, "_default_function", None)

        result = function_module.lambda_handler(make_event({"type": 1}), MagicMock())
        assert result == {"statusCode": 200, "body": {"type": 1}}

        rejected = function_module.lambda_handler(make_event({"type": 1}, signature=b"\x00" * 64), None)
        assert rejected == {"statusCode": 401}
