# SODA Client
# File: __init__.py
# Version: v3

"""Client library for the Socrata Open Data API (SODA)."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .client import SodaClient
from .config import SodaConfig
from .converters import Converter, CsvConverter, JsonConvertible
from .dataset import SodaDataset
from .errors import (
    InvalidOrderDirectionError,
    InvalidPayloadError,
    InvalidResourceError,
    SodaApiError,
    SodaError,
    SodaHttpError,
    SodaTransportError,
    SodaValidationError,
    SoqlBoundsError,
    SoqlTypeError,
)
from .query import OrderDirection, SoqlQuery

__all__ = [
    "__version__",
    "Converter",
    "CsvConverter",
    "InvalidOrderDirectionError",
    "InvalidPayloadError",
    "InvalidResourceError",
    "JsonConvertible",
    "OrderDirection",
    "SodaApiError",
    "SodaClient",
    "SodaConfig",
    "SodaDataset",
    "SodaError",
    "SodaHttpError",
    "SodaTransportError",
    "SodaValidationError",
    "SoqlBoundsError",
    "SoqlQuery",
    "SoqlTypeError",
]


def _resolve_version() -> str:
    """Resolve installed distribution version.

    Falls back to a default when running from a source tree without an
    installed distribution.
    """
    try:
        return version("soda-client")
    except PackageNotFoundError:
        return "0.4.0"


__version__ = _resolve_version()
