"""Custom exceptions for the Shopify tool server.

Every failure that crosses the Shopify network boundary is a single
`ShopifyClientError` tagged with an `ErrorKind`, rather than one subclass per
failure type. Tool handlers render these into error envelopes.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum


class ShopifyToolsError(Exception):
    """Base exception for all shopify_tools errors."""

    pass


class ErrorKind(Enum):
    """Flat taxonomy of Shopify client failures.

    The value is the stable error code reported to tool callers.
    """

    AUTHORIZATION = "SHOPIFY_CLIENT.AUTHORIZATION_ERROR"
    INPUT = "SHOPIFY_CLIENT.INPUT_ERROR"
    REQUEST = "SHOPIFY_CLIENT.REQUEST_ERROR"
    PAYMENT = "SHOPIFY_CLIENT.PAYMENT_ERROR"
    RATE_LIMITING = "SHOPIFY_CLIENT.RATE_LIMITING_ERROR"
    SERVER_INFRASTRUCTURE = "SHOPIFY_CLIENT.SERVER_INFRASTRUCTURE_ERROR"
    GENERAL = "SHOPIFY_CLIENT.GENERAL_ERROR"
    VARIANT_NOT_FOUND = "SHOPIFY_CLIENT.PRODUCT_VARIANT_NOT_FOUND"
    VARIANT_NOT_AVAILABLE = "SHOPIFY_CLIENT.PRODUCT_VARIANT_NOT_AVAILABLE_FOR_SALE"
    WEBHOOK_NOT_FOUND = "SHOPIFY_CLIENT.WEBHOOK_NOT_FOUND"
    WEBHOOK_ALREADY_EXISTS = "SHOPIFY_CLIENT.WEBHOOK_ALREADY_EXISTS"
    INVALID_INPUT = "SHOPIFY_CLIENT.INVALID_INPUT"

    @property
    def code(self) -> str:
        return self.value

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.AUTHORIZATION: "Shopify authorization error",
    ErrorKind.INPUT: "Shopify input error",
    ErrorKind.REQUEST: "Shopify request error",
    ErrorKind.PAYMENT: "Shopify payment error",
    ErrorKind.RATE_LIMITING: "Shopify rate limit exceeded",
    ErrorKind.SERVER_INFRASTRUCTURE: "Shopify server infrastructure error",
    ErrorKind.GENERAL: "General Shopify client error",
    ErrorKind.VARIANT_NOT_FOUND: "Product variant not found",
    ErrorKind.VARIANT_NOT_AVAILABLE: "Product variant not available for sale",
    ErrorKind.WEBHOOK_NOT_FOUND: "Webhook subscription not found",
    ErrorKind.WEBHOOK_ALREADY_EXISTS: "Webhook subscription already exists",
    ErrorKind.INVALID_INPUT: "Invalid input",
}


class ShopifyClientError(ShopifyToolsError):
    """A classified Shopify failure.

    Attributes:
        kind: The taxonomy entry this failure belongs to.
        message: Human-readable summary (also the `str()` of the exception).
        inner_error: The vendor payload or lower-level cause, kept opaque.
        context_data: Diagnostic values describing the attempted operation.
        status_code: HTTP status of the failing response, when there was one.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        inner_error: object = None,
        context_data: Mapping[str, object] | None = None,
        status_code: int | None = None,
        custom_code: str | None = None,
    ) -> None:
        self.kind = kind
        self.message = message or kind.default_message
        self.inner_error = inner_error
        self.context_data = dict(context_data) if context_data else None
        self.status_code = status_code
        self.custom_code = custom_code
        super().__init__(self.message)

    @property
    def code(self) -> str:
        if self.custom_code:
            return f"{self.kind.code}.{self.custom_code}"
        return self.kind.code

    @classmethod
    def invalid_input(
        cls, message: str, context_data: Mapping[str, object] | None = None
    ) -> ShopifyClientError:
        """Build a local validation error raised before any network call."""
        return cls(ErrorKind.INVALID_INPUT, message, context_data=context_data)

    def __repr__(self) -> str:
        return f"ShopifyClientError(kind={self.kind.name}, message={self.message!r})"


class MissingEnvVarError(ShopifyToolsError, ValueError):
    """Raised when a required environment variable is not set."""

    def __init__(self, env_name: str) -> None:
        self.env_name = env_name
        super().__init__(f"{env_name} environment variable is required")


class PositiveNumberEnvVarError(ShopifyToolsError, ValueError):
    """Raised when an environment variable must be a positive number."""

    def __init__(self, env_name: str) -> None:
        self.env_name = env_name
        super().__init__(f"{env_name} must be a positive number.")
