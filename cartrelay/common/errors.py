"""Exception types shared by the relay handlers."""

from typing import Any


class RelayError(Exception):
    """Base class for errors raised by relay code itself."""


class InvalidCartError(RelayError):
    """The request carried no usable `items` array (client error)."""


class CartItemError(RelayError):
    """One cart item is missing a name or has a non-numeric price/quantity."""


class ConfigurationError(RelayError):
    """Required startup configuration is missing."""


def describe_error(exc: BaseException) -> dict[str, Any]:
    """Render an exception as a JSON-safe object for error responses."""

    described: dict[str, Any] = {"type": type(exc).__name__, "message": str(exc)}
    code = getattr(exc, "code", None)
    if code is not None:
        described["code"] = code if isinstance(code, (str, int)) else str(code)
    return described
