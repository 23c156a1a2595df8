# SODA Client
# File: auth.py
# Version: v3

"""Request headers carrying the app token and user credentials."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict
import base64

from .utils import is_null_or_empty

APP_TOKEN_HEADER = "X-App-Token"


@dataclass(frozen=True)
class SodaAuth:
    """Credentials attached to every request against a Socrata domain.

    Socrata accepts either HTTP Basic authentication with the account email
    and password, or an OAuth 2.0 access token sent as
    ``Authorization: OAuth <token>``. When an OAuth token is set it is used
    in place of Basic authentication.
    """

    app_token: str = ""
    email: str = ""
    password: str = ""
    oauth2_token: str = ""

    @property
    def has_basic_credentials(self) -> bool:
        return not is_null_or_empty(self.email) and not is_null_or_empty(
            self.password
        )

    @property
    def has_oauth2_token(self) -> bool:
        return not is_null_or_empty(self.oauth2_token)

    def headers(self) -> Dict[str, str]:
        """Return the standard JSON headers plus whichever auth applies."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            APP_TOKEN_HEADER: self.app_token,
        }

        if self.has_oauth2_token:
            headers["Authorization"] = f"OAuth {self.oauth2_token}"
        elif self.has_basic_credentials:
            # Build HTTP Basic Authorization header: base64(email:password)
            raw_credentials = f"{self.email}:{self.password}"
            basic_token = base64.b64encode(raw_credentials.encode("utf-8")).decode(
                "ascii"
            )
            headers["Authorization"] = f"Basic {basic_token}"

        return headers
