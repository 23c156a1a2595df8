# SODA Client
# File: errors.py
# Version: v3

"""Exception taxonomy for the SODA client.

Four families, all rooted at :class:`SodaError`:

- validation errors, raised before any network call;
- transport errors, when the HTTP stack could not complete the call;
- HTTP errors, when the server answered with a body that is not JSON;
- API errors, when the server answered with a JSON error envelope.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SodaError(Exception):
    """Base class for every error raised by this package."""


class SodaValidationError(SodaError, ValueError):
    """Invalid input detected locally, before any request is sent."""


class InvalidResourceError(SodaValidationError):
    """The resource ID does not look like ``xxxx-xxxx``."""


class InvalidOrderDirectionError(SodaValidationError):
    """A sort direction other than ASC or DESC was given."""


class InvalidPayloadError(SodaValidationError):
    """An upload payload could not be turned into a JSON string."""


class SoqlBoundsError(SodaValidationError):
    """A numeric SoQL clause is out of range."""


class SoqlTypeError(SodaValidationError, TypeError):
    """A numeric SoQL clause was given something other than an int."""


class SodaTransportError(SodaError):
    """The HTTP call could not be completed (DNS, connect, timeout...)."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"Transport error {code}: {message}")


class SodaHttpError(SodaError):
    """The server answered with something other than JSON.

    Usually an off-band failure such as a proxy error or an HTML 5xx page.
    """

    def __init__(self, status_code: int, response_text: str) -> None:
        self.status_code = status_code
        self.response_text = response_text
        body_preview = (response_text or "")[:500]
        super().__init__(
            f"HTTP {status_code} with a non-JSON body. "
            f"Response snippet: {body_preview}"
        )


class SodaApiError(SodaError):
    """The server answered with a JSON error envelope.

    ``code`` is the machine-readable code from the envelope, for instance
    ``authentication_required`` or ``row.missing``.
    """

    UNKNOWN_CODE = "error.unknown"

    def __init__(self, json_response: Dict[str, Any]) -> None:
        self.json_response = json_response
        self.code: str = json_response.get("code") or self.UNKNOWN_CODE
        self.message: Optional[str] = json_response.get("message")
        super().__init__(f"{self.code}: {self.message}")
