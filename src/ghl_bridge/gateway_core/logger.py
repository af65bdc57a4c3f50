"""Logging for the GHL bridge: namespaced loggers and a stdout handler that masks credentials."""

import logging
import sys
from typing import Iterable, Optional, Union

_LOGGER_NAME = "ghl_bridge"
_MASK = "***"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger below the ``ghl_bridge`` namespace.

    Args:
        name: Module ``__name__`` or a short sub-logger name. If None, returns the bridge's root logger.

    Returns:
        The requested logger.
    """
    if not name or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


class SecretRedactingFilter(logging.Filter):
    """Replaces configured secrets (bearer token, API keys) in log messages with ``***``."""

    def __init__(self, secrets: Iterable[Optional[str]] = ()) -> None:
        super().__init__()
        self.secrets = tuple(s for s in secrets if s and s.strip())

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        redacted = message
        for secret in self.secrets:
            redacted = redacted.replace(secret, _MASK)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(
    level: Union[int, str] = logging.INFO,
    secrets: Iterable[Optional[str]] = (),
    format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> None:
    """Attach a stdout handler to the bridge's root logger.

    Only the server entry point calls this. Library users configure logging themselves.
    Repeated calls keep the first handler and only update the level.

    Args:
        level: Logging level, as a number or a name such as ``"debug"``.
        secrets: Values that must never appear in log output.
        format_str: Log format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_str))
    handler.addFilter(SecretRedactingFilter(secrets))
    logger.addHandler(handler)


logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
