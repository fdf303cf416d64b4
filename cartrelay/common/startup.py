"""Startup-time helpers: safe config logging and fail-fast credential checks."""

import os

from cartrelay.common.config import RelaySettings, require_payment_credentials
from cartrelay.common.errors import ConfigurationError
from cartrelay.common.logging import logger


def _safe_env(name: str) -> str:
    """Return env value with simple redaction for secret-like variable names."""

    value = os.getenv(name)
    if value is None:
        return "<unset>"
    if any(secret in name for secret in ["KEY", "SECRET", "PASSWORD", "TOKEN", "CLIENT"]):
        return "<redacted>"
    return value


def log_startup_config(service_name: str, keys: list[str]) -> None:
    """Log selected startup config keys for quick troubleshooting."""

    config = {"service": service_name}
    for key in keys:
        config[key] = _safe_env(key)
    logger.info("startup_config=%s", config)


def ensure_payment_credentials(config: RelaySettings) -> None:
    """Terminate the process before serving when Midtrans keys are absent."""

    try:
        require_payment_credentials(config)
    except ConfigurationError as exc:
        logger.error("fatal_config_error: %s", exc)
        raise SystemExit(1) from exc
