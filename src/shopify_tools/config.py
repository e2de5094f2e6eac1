"""Centralised, injectable configuration for the Shopify tool server."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .exceptions import MissingEnvVarError, PositiveNumberEnvVarError

DEFAULT_API_VERSION = "2024-04"


@dataclass(frozen=True)
class ShopifyConfig:
    """Immutable configuration for the Shopify client and tool server.

    Load from environment with `ShopifyConfig.from_env()` or construct directly for testing.
    """

    # Shopify Admin API
    access_token: str = ""
    shop_domain: str = ""
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: float = 30.0

    # Resilience
    min_request_delay_seconds: float = 0.5
    max_retries: int = 3
    initial_retry_delay_seconds: float = 1.0
    max_retry_delay_seconds: float = 10.0
    backoff_factor: float = 2.0

    # Caching
    cache_ttl_seconds: float = 300.0

    # Observability
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            ShopifyConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            access_token=os.getenv("SHOPIFY_ACCESS_TOKEN", "").strip(),
            shop_domain=_normalise_domain(os.getenv("MYSHOPIFY_DOMAIN", "")),
            api_version=os.getenv("SHOPIFY_API_VERSION", "").strip() or DEFAULT_API_VERSION,
            timeout_seconds=_parse_positive_float(
                os.getenv("SHOPIFY_TIMEOUT_SECONDS", ""),
                default=30.0,
                env_name="SHOPIFY_TIMEOUT_SECONDS",
            ),
            min_request_delay_seconds=_parse_positive_float(
                os.getenv("SHOPIFY_MIN_REQUEST_DELAY_SECONDS", ""),
                default=0.5,
                env_name="SHOPIFY_MIN_REQUEST_DELAY_SECONDS",
                allow_zero=True,
            ),
            max_retries=_parse_positive_int(
                os.getenv("SHOPIFY_MAX_RETRIES", ""), default=3, env_name="SHOPIFY_MAX_RETRIES"
            ),
            initial_retry_delay_seconds=_parse_positive_float(
                os.getenv("SHOPIFY_INITIAL_RETRY_DELAY_SECONDS", ""),
                default=1.0,
                env_name="SHOPIFY_INITIAL_RETRY_DELAY_SECONDS",
                allow_zero=True,
            ),
            max_retry_delay_seconds=_parse_positive_float(
                os.getenv("SHOPIFY_MAX_RETRY_DELAY_SECONDS", ""),
                default=10.0,
                env_name="SHOPIFY_MAX_RETRY_DELAY_SECONDS",
                allow_zero=True,
            ),
            backoff_factor=_parse_positive_float(
                os.getenv("SHOPIFY_BACKOFF_FACTOR", ""),
                default=2.0,
                env_name="SHOPIFY_BACKOFF_FACTOR",
            ),
            cache_ttl_seconds=_parse_positive_float(
                os.getenv("SHOPIFY_CACHE_TTL_SECONDS", ""),
                default=300.0,
                env_name="SHOPIFY_CACHE_TTL_SECONDS",
            ),
            log_level=os.getenv("SHOPIFY_LOG_LEVEL", "").strip().upper() or "INFO",
        )

    def validate(self) -> Self:
        """Raise if the credentials needed to reach Shopify are missing."""
        if not self.access_token:
            raise MissingEnvVarError("SHOPIFY_ACCESS_TOKEN")
        if not self.shop_domain:
            raise MissingEnvVarError("MYSHOPIFY_DOMAIN")
        return self

    def with_overrides(
        self,
        *,
        api_version: str | None = None,
        log_level: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            api_version=self.api_version if api_version is None else api_version.strip(),
            log_level=self.log_level if log_level is None else log_level.strip().upper(),
        )

    def describe(self) -> dict[str, object]:
        """Return the resolved settings with the access token masked."""
        return {
            "shop_domain": self.shop_domain or "<unset>",
            "access_token": _mask(self.access_token),
            "api_version": self.api_version,
            "timeout_seconds": self.timeout_seconds,
            "min_request_delay_seconds": self.min_request_delay_seconds,
            "max_retries": self.max_retries,
            "initial_retry_delay_seconds": self.initial_retry_delay_seconds,
            "max_retry_delay_seconds": self.max_retry_delay_seconds,
            "backoff_factor": self.backoff_factor,
            "cache_ttl_seconds": self.cache_ttl_seconds,
            "log_level": self.log_level,
        }


def _normalise_domain(value: str) -> str:
    """Strip scheme and trailing slashes from a shop domain."""
    domain = value.strip()
    for prefix in ("https://", "http://"):
        if domain.startswith(prefix):
            domain = domain[len(prefix) :]
    return domain.rstrip("/")


def _parse_positive_float(
    value: str, *, default: float, env_name: str, allow_zero: bool = False
) -> float:
    """Parse an optional positive number from an environment variable."""
    text = value.strip()
    if not text:
        return float(default)
    try:
        parsed = float(text)
    except ValueError as exc:
        raise PositiveNumberEnvVarError(env_name) from exc
    if not math.isfinite(parsed) or parsed < 0 or (parsed == 0 and not allow_zero):
        raise PositiveNumberEnvVarError(env_name)
    return parsed


def _parse_positive_int(value: str, *, default: int, env_name: str) -> int:
    """Parse an optional positive whole number from an environment variable."""
    text = value.strip()
    if not text:
        return default
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveNumberEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveNumberEnvVarError(env_name)
    return parsed


def _mask(secret: str) -> str:
    if not secret:
        return "<unset>"
    if len(secret) <= 8:
        return "****"
    return f"{secret[:4]}...{secret[-4:]}"
