# SODA Client
# File: config.py
# Version: v3

"""Configuration loading for the SODA client."""

from __future__ import annotations

from dataclasses import dataclass
import os

_TRUTHY = {"1", "true", "yes", "on"}


def _env_str(name: str) -> str:
    return (os.getenv(name) or "").strip()


def _parse_bool_env(name: str, default: bool = False) -> bool:
    """``SOCRATA_*`` flags: 1/true/yes/on enable, anything else disables."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _parse_int_env(name: str, default: int, min_value: int, max_value: int) -> int:
    """Read an int, falling back to ``default`` when unset or garbled.

    The result is clamped to ``[min_value, max_value]``.
    """
    raw = _env_str(name)
    try:
        value = int(raw) if raw else default
    except ValueError:
        value = default

    return max(min_value, min(value, max_value))


@dataclass
class SodaConfig:
    """Connection settings for a Socrata domain.

    Only ``domain`` is required to read public datasets. ``app_token``
    lifts throttling; ``email``/``password`` or ``oauth2_token`` are needed
    for writes and private data.
    """

    domain: str | None
    app_token: str = ""
    email: str = ""
    password: str = ""
    oauth2_token: str = ""

    timeout_seconds: int = 30
    verify_tls: bool = True
    associative: bool = True

    @classmethod
    def from_env(cls) -> "SodaConfig":
        """Create configuration from environment variables."""
        return cls(
            domain=_env_str("SOCRATA_DOMAIN") or None,
            app_token=_env_str("SOCRATA_APP_TOKEN"),
            email=_env_str("SOCRATA_EMAIL"),
            password=os.getenv("SOCRATA_PASSWORD", ""),
            oauth2_token=_env_str("SOCRATA_OAUTH_TOKEN"),
            timeout_seconds=_parse_int_env(
                "SOCRATA_TIMEOUT_SECONDS", default=30, min_value=1, max_value=600
            ),
            verify_tls=_parse_bool_env("SOCRATA_VERIFY_TLS", default=True),
            associative=_parse_bool_env("SOCRATA_ASSOCIATIVE", default=True),
        )
