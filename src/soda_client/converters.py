# SODA Client
# File: converters.py
# Version: v3

"""Converters that turn other tabular formats into SODA upload JSON.

Any object with a ``to_json()`` method returning a JSON string can be passed
to :meth:`SodaDataset.upsert` or :meth:`SodaDataset.replace`. The classes here
cover the common case of CSV text.
"""

from __future__ import annotations

import csv
import io
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from .errors import InvalidPayloadError


@runtime_checkable
class JsonConvertible(Protocol):
    """Anything that can render itself as a JSON string."""

    def to_json(self) -> str:
        ...


class Converter(ABC):
    """Base class for converters holding raw, custom-formatted text."""

    def __init__(self, data: str) -> None:
        self.data = data

    @classmethod
    def from_file(cls, filename: Union[str, Path]):
        """Build a converter from the contents of ``filename``."""
        path = Path(filename)
        if not path.is_file() or not os.access(path, os.R_OK):
            raise FileNotFoundError(
                f"The following file could not be found or opened: {filename}"
            )

        return cls(path.read_text(encoding="utf-8"))

    @abstractmethod
    def to_json(self) -> str:
        """Return the data as a JSON string."""


class CsvConverter(Converter):
    """CSV with a header row, converted to a JSON array of row objects.

    Every data row must have exactly as many cells as the header.
    """

    def to_json(self) -> str:
        reader = csv.DictReader(io.StringIO(self.data.strip()))
        records = []
        for row in reader:
            # DictReader pads short rows with None and files extras under None
            if None in row or None in row.values():
                raise InvalidPayloadError(
                    f"CSV row {reader.line_num} does not have "
                    f"{len(reader.fieldnames or [])} cells like the header row."
                )
            records.append(row)

        return json.dumps(records)
