# SODA Client
# File: client.py
# Version: v4
"""Connection settings shared by every dataset on one Socrata domain."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import httpx

from .auth import SodaAuth
from .config import SodaConfig
from .errors import SodaValidationError
from .utils import is_null_or_empty

logger = logging.getLogger(__name__)

_PROTOCOL_PREFIX = re.compile(r"^https?://")


@dataclass
class SodaClient:
    """Domain, app token and credentials for talking to the Socrata API.

    ``url`` may be a bare domain (``data.seattle.gov``) or a full URL; the
    protocol and any trailing slash are stripped.

    Responses are decoded into dicts and lists by default. Call
    :meth:`disable_associative_arrays` to get attribute-style objects
    (``types.SimpleNamespace``) instead.
    """

    url: str
    token: str = ""
    email: str = ""
    password: str = ""
    oauth2_token: str = ""
    timeout: float = 30.0
    verify_tls: bool = True

    # Injected into every httpx.Client; used by tests to fake the server.
    transport: Optional[httpx.BaseTransport] = field(default=None, repr=False)

    _associative: bool = field(default=True, init=False, repr=False)

    def __post_init__(self) -> None:
        self.domain = _PROTOCOL_PREFIX.sub("", self.url or "").rstrip("/")
        self.token = self.token or ""
        self.email = self.email or ""
        self.password = self.password or ""
        self.oauth2_token = self.oauth2_token or ""

        if is_null_or_empty(self.email) != is_null_or_empty(self.password):
            logger.warning(
                "Only one of email/password was given for '%s'; "
                "requests will be sent without Basic authentication.",
                self.domain,
            )

    @classmethod
    def from_config(
        cls,
        config: SodaConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "SodaClient":
        if not config.domain:
            raise SodaValidationError(
                "SOCRATA_DOMAIN is not set. "
                "Please configure it before creating a SodaClient."
            )

        client = cls(
            url=config.domain,
            token=config.app_token,
            email=config.email,
            password=config.password,
            oauth2_token=config.oauth2_token,
            timeout=float(config.timeout_seconds),
            verify_tls=config.verify_tls,
            transport=transport,
        )
        if not config.associative:
            client.disable_associative_arrays()
        return client

    @classmethod
    def from_env(cls) -> "SodaClient":
        return cls.from_config(SodaConfig.from_env())

    # ------------------------------------------------------------------
    # Decoding mode
    # ------------------------------------------------------------------

    def enable_associative_arrays(self) -> None:
        self._associative = True

    def disable_associative_arrays(self) -> None:
        self._associative = False

    def associative_arrays_enabled(self) -> bool:
        return self._associative

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def set_oauth2_token(self, token: str) -> None:
        self.oauth2_token = token or ""

    @property
    def auth(self) -> SodaAuth:
        return SodaAuth(
            app_token=self.token,
            email=self.email,
            password=self.password,
            oauth2_token=self.oauth2_token,
        )
