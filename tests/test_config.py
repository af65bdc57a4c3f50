import logging

import pytest
from pydantic import ValidationError

from ghl_bridge.gateway_core import GatewayConfig, get_logger, setup_logging
from ghl_bridge.gateway_core.config import DEFAULT_UPSTREAM_URL
from ghl_bridge.gateway_core.logger import SecretRedactingFilter

ENV_VARS = (
    "GHL_PIT_TOKEN",
    "GHL_LOCATION_ID",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GHL_MCP_URL",
    "GHL_TENANT_HEADER",
    "GHL_EXECUTE_TIMEOUT",
    "GHL_TEST_TIMEOUT",
    "HOST",
    "PORT",
    "GEMINI_MODEL",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults() -> None:
    config = GatewayConfig()

    assert config.upstream_url == DEFAULT_UPSTREAM_URL
    assert config.tenant_header == "locationId"
    assert config.execute_timeout == 30
    assert config.test_timeout == 10
    assert config.port == 3000
    assert config.is_configured is False


def test_blank_token_is_not_configured() -> None:
    assert GatewayConfig(bearer_token="   ").is_configured is False
    assert GatewayConfig(bearer_token="pit-1").is_configured is True


def test_config_is_frozen() -> None:
    config = GatewayConfig(bearer_token="pit-1")
    with pytest.raises(ValidationError):
        config.bearer_token = "other"  # type: ignore[misc]


def test_timeouts_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        GatewayConfig(execute_timeout=0)


def test_from_env(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("GHL_PIT_TOKEN", "pit-env")
    clean_env.setenv("GHL_LOCATION_ID", "loc-env")
    clean_env.setenv("GOOGLE_API_KEY", "google-key")
    clean_env.setenv("GHL_EXECUTE_TIMEOUT", "12.5")
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("LOG_LEVEL", "debug")

    config = GatewayConfig.from_env(load_env_file=False)

    assert config.bearer_token == "pit-env"
    assert config.default_tenant_id == "loc-env"
    assert config.gemini_api_key == "google-key"
    assert config.execute_timeout == 12.5
    assert config.port == 8080
    assert config.log_level == "debug"
    assert config.is_configured


def test_from_env_logs_missing_token(clean_env: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="ghl_bridge"):
        config = GatewayConfig.from_env(load_env_file=False)

    assert config.is_configured is False
    assert "GHL_PIT_TOKEN" in caplog.text


def test_logger_names_are_namespaced() -> None:
    assert get_logger().name == "ghl_bridge"
    assert get_logger("server").name == "ghl_bridge.server"
    assert get_logger("ghl_bridge.server.app").name == "ghl_bridge.server.app"


def test_setup_logging_does_not_stack_handlers() -> None:
    root = logging.getLogger("ghl_bridge")
    before = list(root.handlers)
    try:
        setup_logging()
        setup_logging()
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)


def test_redacting_filter_masks_secrets() -> None:
    record = logging.LogRecord("ghl_bridge", logging.INFO, __file__, 1, "token=%s key=%s", ("pit-secret", "g-key"), None)

    assert SecretRedactingFilter(["pit-secret", None, "  "]).filter(record) is True

    assert record.getMessage() == "token=*** key=g-key"


def test_redacting_filter_without_secrets_leaves_record() -> None:
    record = logging.LogRecord("ghl_bridge", logging.INFO, __file__, 1, "hello %s", ("world",), None)

    SecretRedactingFilter().filter(record)

    assert record.args == ("world",)
    assert record.getMessage() == "hello world"


def test_setup_logging_accepts_level_names() -> None:
    root = logging.getLogger("ghl_bridge")
    before_handlers = list(root.handlers)
    before_level = root.level
    try:
        setup_logging("debug", secrets=("pit-secret",))
        assert root.level == logging.DEBUG
        added = [h for h in root.handlers if h not in before_handlers]
        assert any(isinstance(f, SecretRedactingFilter) for h in added for f in h.filters)
    finally:
        root.setLevel(before_level)
        for handler in root.handlers[:]:
            if handler not in before_handlers:
                root.removeHandler(handler)
