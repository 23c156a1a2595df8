# SODA Client
# File: models.py
# Version: v2

"""Value objects returned by the request layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class SodaResponse:
    """One decoded HTTP exchange with the SODA API."""

    status_code: int

    # Case-insensitive, so HTTP/2 lower-cased names still match.
    headers: httpx.Headers

    # Decoded JSON body; None for DELETE requests.
    data: Any = None
