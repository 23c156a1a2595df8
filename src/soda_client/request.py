# SODA Client
# File: request.py
# Version: v8
"""HTTP layer for the SODA client.

:class:`RequestExecutor` performs a single GET/POST/PUT/DELETE against a fully
formed resource URL and classifies the outcome:

1. the call could not be completed: :class:`SodaTransportError`;
2. the body is not JSON (proxy error, HTML 5xx page): :class:`SodaHttpError`;
3. the body is a JSON object with a truthy ``error`` field:
   :class:`SodaApiError`;
4. otherwise the decoded body is returned inside a :class:`SodaResponse`.
"""

from __future__ import annotations

import json
import logging
from types import SimpleNamespace
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

import httpx
from httpx import RequestError

from .auth import SodaAuth
from .errors import SodaApiError, SodaHttpError, SodaTransportError
from .models import SodaResponse
from .query import SoqlQuery
from .utils import is_null_or_empty

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOL = "https"
DEFAULT_TIMEOUT_SECONDS = 30.0

QueryLike = Union[str, SoqlQuery, Mapping[str, Any], None]


class RequestExecutor:
    """Send requests to one URL with the standard SODA headers attached."""

    def __init__(
        self,
        url: str,
        auth: Optional[SodaAuth] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        verify_tls: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.url = url
        self.auth = auth or SodaAuth()
        self.timeout = timeout
        self.verify_tls = verify_tls
        self._transport = transport

    # ------------------------------------------------------------------
    # Public verbs
    # ------------------------------------------------------------------

    def get(self, query: QueryLike = None, associative: bool = True) -> SodaResponse:
        """GET the URL, with ``query`` appended as its query component.

        ``query`` may be a raw string, a :class:`SoqlQuery`, or a mapping whose
        keys and values are percent-encoded and joined with ``&``.
        """
        return self._handle_query(
            "GET", self.build_url(self.url, query), associative=associative
        )

    def post(self, json_body: str, associative: bool = True) -> SodaResponse:
        return self._handle_query(
            "POST", self.url, associative=associative, content=json_body
        )

    def put(self, json_body: str, associative: bool = True) -> SodaResponse:
        return self._handle_query(
            "PUT", self.url, associative=associative, content=json_body
        )

    def delete(self, associative: bool = True) -> SodaResponse:
        """DELETE the URL. A successful body is discarded; headers are kept.

        Error responses are still classified, so a refused delete raises.
        """
        return self._handle_query(
            "DELETE", self.url, associative=associative, ignore_body=True
        )

    # ------------------------------------------------------------------
    # URL helpers
    # ------------------------------------------------------------------

    @staticmethod
    def build_url(url: str, query: QueryLike = None) -> str:
        if isinstance(query, Mapping):
            parameters = RequestExecutor.format_parameters(query)
            return f"{url}?{parameters}" if parameters else url

        if query is None:
            return url

        query_string = str(query)
        if is_null_or_empty(query_string):
            return url

        return f"{url}?{query_string}"

    @staticmethod
    def format_parameters(params: Mapping[str, Any]) -> str:
        return "&".join(
            f"{quote_component(key)}={quote_component(value)}"
            for key, value in params.items()
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _handle_query(
        self,
        method: str,
        url: str,
        associative: bool,
        content: Optional[str] = None,
        ignore_body: bool = False,
    ) -> SodaResponse:
        response = self._send(method, url, content)

        if ignore_body:
            if response.is_success:
                self._raise_for_error_envelope(response.text)
            else:
                self._handle_response_body(response, associative)
            return SodaResponse(
                status_code=response.status_code, headers=response.headers
            )

        data = self._handle_response_body(response, associative)
        return SodaResponse(
            status_code=response.status_code,
            headers=response.headers,
            data=data,
        )

    def _send(
        self, method: str, url: str, content: Optional[str] = None
    ) -> httpx.Response:
        logger.debug("%s %s", method, url)

        with httpx.Client(
            timeout=self.timeout,
            verify=self.verify_tls,
            transport=self._transport,
        ) as http_client:
            try:
                response = http_client.request(
                    method,
                    url,
                    headers=self.auth.headers(),
                    content=content.encode("utf-8") if content is not None else None,
                )
            except RequestError as exc:
                raise SodaTransportError(
                    type(exc).__name__, str(exc) or repr(exc)
                ) from exc

        logger.debug("%s %s -> HTTP %s", method, url, response.status_code)
        return response

    @staticmethod
    def _raise_for_error_envelope(body: str) -> None:
        try:
            decoded = json.loads(body)
        except ValueError:
            return

        if isinstance(decoded, dict) and decoded.get("error"):
            raise SodaApiError(decoded)

    @staticmethod
    def _handle_response_body(response: httpx.Response, associative: bool) -> Any:
        body = response.text

        try:
            decoded = json.loads(body)
        except ValueError:
            decoded = None

        # Somehow got a server error without a JSON object carrying details
        if decoded is None:
            raise SodaHttpError(response.status_code, body)

        if isinstance(decoded, dict) and decoded.get("error"):
            raise SodaApiError(decoded)

        if associative:
            return decoded

        return json.loads(body, object_hook=lambda obj: SimpleNamespace(**obj))


def quote_component(value: Any) -> str:
    """Percent-encode everything except unreserved characters."""
    return quote(str(value), safe="")
