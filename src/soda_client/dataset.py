# SODA Client
# File: dataset.py
# Version: v8
"""Dataset-level operations against one Socrata resource.

Implements:

- get_data() / get_dataset() via ``/resource/<id>.json``
- get_row() / delete_row() via ``/resource/<id>/<row id>.json``
- upsert() (POST) and replace() (PUT) via ``/resource/<id>.json``
- get_metadata() via ``/views/<id>.json``
- get_api_version(), inferred from response headers
"""

from __future__ import annotations

import json
import logging
import warnings
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

import httpx

from .client import SodaClient
from .converters import JsonConvertible
from .errors import InvalidPayloadError, SodaValidationError
from .query import SoqlQuery
from .request import DEFAULT_PROTOCOL, QueryLike, RequestExecutor
from .utils import is_json, is_null_or_empty, validate_resource_id

logger = logging.getLogger(__name__)

LEGACY_TYPES_HEADER = "X-SODA2-Legacy-Types"
TRUTH_LAST_MODIFIED_HEADER = "X-SODA2-Truth-Last-Modified"

Payload = Union[str, Mapping[str, Any], list, tuple, JsonConvertible]


def to_json_payload(payload: Payload) -> str:
    """Normalise an upload payload to a JSON string.

    - objects with a ``to_json()`` method (converters) are asked for their JSON;
    - dicts, lists and tuples are JSON-encoded;
    - strings must already be valid JSON.

    Anything else raises :class:`InvalidPayloadError`.
    """
    if isinstance(payload, JsonConvertible):
        payload = payload.to_json()
    elif isinstance(payload, (Mapping, list, tuple)):
        try:
            return json.dumps(payload)
        except (TypeError, ValueError) as exc:
            raise InvalidPayloadError(
                f"The given data could not be encoded as JSON: {exc}"
            ) from exc

    if not is_json(payload):
        raise InvalidPayloadError("The given data is not valid JSON")

    return payload


def _lookup(document: Any, key: str) -> Any:
    """Read ``key`` from a dict or an attribute-style decoded object."""
    if isinstance(document, Mapping):
        return document.get(key)
    return getattr(document, key, None)


class SodaDataset:
    """One Socrata dataset, addressed by its ``xxxx-xxxx`` resource ID."""

    def __init__(self, soda_client: SodaClient, resource_id: str) -> None:
        validate_resource_id(resource_id)

        if not isinstance(soda_client, SodaClient):
            raise SodaValidationError(
                "The first argument is expected to be a SodaClient object"
            )

        self.client = soda_client
        self.resource_id = resource_id

        self._api_version: Optional[float] = None
        self._metadata: Any = None

    # ------------------------------------------------------------------
    # URLs
    # ------------------------------------------------------------------

    @property
    def resource_url(self) -> str:
        return self._build_api_url("resource")

    @property
    def view_url(self) -> str:
        return self._build_api_url("views")

    def row_url(self, row_id: Union[str, int]) -> str:
        return self._build_api_url(
            "resource", f"{self.resource_id}/{quote(str(row_id), safe='')}"
        )

    def _build_api_url(self, location: str, identifier: Optional[str] = None) -> str:
        identifier = identifier or self.resource_id
        return f"{DEFAULT_PROTOCOL}://{self.client.domain}/{location}/{identifier}.json"

    def _executor(self, url: str) -> RequestExecutor:
        return RequestExecutor(
            url,
            auth=self.client.auth,
            timeout=self.client.timeout,
            verify_tls=self.client.verify_tls,
            transport=self.client.transport,
        )

    # ------------------------------------------------------------------
    # Metadata & API version
    # ------------------------------------------------------------------

    def get_metadata(self, force_fetch: bool = False) -> Any:
        """Return the dataset's view metadata (schema, license, timestamps).

        Fetched once and cached; pass ``force_fetch=True`` to refresh.
        """
        if is_null_or_empty(self._metadata) or force_fetch:
            response = self._executor(self.view_url).get(
                associative=self.client.associative_arrays_enabled()
            )
            self._metadata = response.data

        return self._metadata

    def get_api_version(self) -> float:
        """Return the SODA API version backing this dataset.

        ``1`` for the legacy API, ``2`` for SODA 2.0, ``2.1`` for datasets
        on the new backend, ``0`` when the headers gave no hint.
        """
        if self._api_version is None:
            # Only the response headers matter here
            self.get_data({"$limit": 0})

        return self._api_version or 0

    def _record_api_version(self, headers: httpx.Headers) -> None:
        if self._api_version is not None:
            return

        version = self._parse_api_version(headers)
        if version:
            logger.debug(
                "Resource '%s' is served by SODA API v%s", self.resource_id, version
            )
            self._api_version = version

    def _parse_api_version(self, headers: httpx.Headers) -> float:
        legacy = headers.get(LEGACY_TYPES_HEADER)
        if legacy and legacy.strip().lower() not in {"false", "0"}:
            return 1

        if TRUTH_LAST_MODIFIED_HEADER in headers:
            if _lookup(self.get_metadata(), "newBackend"):
                return 2.1
            return 2

        return 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_data(self, filter_or_query: QueryLike = None) -> Any:
        """Fetch rows from the dataset.

        ``filter_or_query`` may be a :class:`SoqlQuery`, a raw query string
        such as ``"$where=state='AR'"``, or a mapping of SoQL parameters. When
        omitted, the default query (every column, ordered by row ID) is sent.
        """
        if not isinstance(filter_or_query, SoqlQuery) and is_null_or_empty(
            filter_or_query
        ):
            filter_or_query = SoqlQuery()

        response = self._executor(self.resource_url).get(
            filter_or_query, associative=self.client.associative_arrays_enabled()
        )
        self._record_api_version(response.headers)

        return response.data

    def get_dataset(self, filter_or_query: QueryLike = None) -> Any:
        """Deprecated alias of :meth:`get_data`."""
        warnings.warn(
            "SodaDataset.get_dataset() is deprecated; use get_data() instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.get_data(filter_or_query)

    def get_row(self, row_id: Union[str, int]) -> Any:
        response = self._executor(self.row_url(row_id)).get(
            associative=self.client.associative_arrays_enabled()
        )
        self._record_api_version(response.headers)

        return response.data

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def delete_row(self, row_id: Union[str, int]) -> None:
        response = self._executor(self.row_url(row_id)).delete(
            associative=self.client.associative_arrays_enabled()
        )
        self._record_api_version(response.headers)

    def upsert(self, payload: Payload) -> Any:
        """Create, update or delete rows in one call (POST)."""
        upsert_data = to_json_payload(payload)

        response = self._executor(self.resource_url).post(
            upsert_data, associative=self.client.associative_arrays_enabled()
        )
        return response.data

    def replace(self, payload: Payload) -> Any:
        """Replace the dataset's rows with ``payload`` (PUT)."""
        replace_data = to_json_payload(payload)

        response = self._executor(self.resource_url).put(
            replace_data, associative=self.client.associative_arrays_enabled()
        )
        return response.data
