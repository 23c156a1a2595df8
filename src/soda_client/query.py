# SODA Client
# File: query.py
# Version: v6
"""Fluent builder for SoQL query strings.

A :class:`SoqlQuery` accumulates clauses through chainable setters and renders
them as a URL query component, for example::

    SoqlQuery().select("state", "sample_type").where("state = 'AR'").limit(5)

renders as::

    $select=state,sample_type&$order=:id%20ASC&$where=state%20%3D%20%27AR%27&$limit=5

Clauses are always emitted in the same order, regardless of the order the
setters were called in:

- $select (defaults to ``*``)
- $order (defaults to ``:id ASC``)
- $where
- $group
- $having
- $offset
- $limit
- $q
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

from .errors import InvalidOrderDirectionError, SoqlBoundsError, SoqlTypeError

DELIMITER = ","

SELECT_KEY = "$select"
WHERE_KEY = "$where"
ORDER_KEY = "$order"
GROUP_KEY = "$group"
HAVING_KEY = "$having"
OFFSET_KEY = "$offset"
LIMIT_KEY = "$limit"
SEARCH_KEY = "$q"

DEFAULT_SELECT = "*"
DEFAULT_ORDER_COLUMN = ":id"
MAXIMUM_LIMIT = 1000

# Left literal: wildcard select and system fields such as ``:id``.
_SAFE_CHARS = "*:"


def _encode(value: Any) -> str:
    return quote(str(value), safe=_SAFE_CHARS)


class OrderDirection(str, Enum):
    """Sort direction accepted by ``$order``."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: Union["OrderDirection", str]) -> "OrderDirection":
        """Turn ``value`` into a direction or raise InvalidOrderDirectionError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidOrderDirectionError(
                f"An invalid sort order ({value!r}) was given; you may only "
                "sort using ASC or DESC."
            ) from None


DEFAULT_ORDER_DIRECTION = OrderDirection.ASC


class SoqlQuery:
    """Mutable SoQL builder; every setter returns ``self``.

    ``select``, ``where``, ``having``, ``limit``, ``offset`` and
    ``full_text_search`` overwrite any earlier value. ``order`` and ``group``
    accumulate in call order.
    """

    def __init__(self) -> None:
        self._select: List[str] = [DEFAULT_SELECT]
        self._where: Optional[str] = None
        self._having: Optional[str] = None
        self._order: List[str] = []
        self._group: List[str] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self._search: Optional[str] = None

    # ------------------------------------------------------------------
    # Clause setters
    # ------------------------------------------------------------------

    def select(self, *columns: Any) -> "SoqlQuery":
        """Choose the columns to return.

        Accepts any of:

        - nothing, meaning every column (``*``);
        - column names as separate arguments;
        - a single list or tuple of column names;
        - a single mapping of ``column -> alias``, where an alias of ``None``
          keeps the column name as-is. Mapping order is preserved.
        """
        if not columns:
            self._select = [DEFAULT_SELECT]
        elif len(columns) == 1 and isinstance(columns[0], Mapping):
            self._select = self._format_aliases(columns[0])
        elif len(columns) == 1 and isinstance(columns[0], (list, tuple)):
            self._select = [_encode(column) for column in columns[0]] or [
                DEFAULT_SELECT
            ]
        else:
            self._select = [_encode(column) for column in columns]

        return self

    @staticmethod
    def _format_aliases(aliases: Mapping[str, Optional[str]]) -> List[str]:
        formatted: List[str] = []
        for column, alias in aliases.items():
            if alias is None or not str(alias).strip():
                formatted.append(_encode(str(column).strip()))
            else:
                formatted.append(
                    _encode(f"{str(column).strip()} AS {str(alias).strip()}")
                )
        return formatted or [DEFAULT_SELECT]

    def where(self, statement: str) -> "SoqlQuery":
        """Filter rows with a raw SoQL predicate such as ``state = 'AR'``."""
        self._where = statement
        return self

    def having(self, statement: str) -> "SoqlQuery":
        """Filter aggregated rows; same shape as :meth:`where`."""
        self._having = statement
        return self

    def order(
        self,
        column: str,
        direction: Union[OrderDirection, str] = DEFAULT_ORDER_DIRECTION,
    ) -> "SoqlQuery":
        """Append a sort key. Later calls break ties left by earlier ones.

        Servers on the legacy (v1) API only sort on a single column and
        answer multi-column orders with an API error.
        """
        parsed = OrderDirection.parse(direction)
        self._order.append(_encode(f"{column} {parsed.value}"))
        return self

    def group(self, column: str) -> "SoqlQuery":
        self._group.append(_encode(column))
        return self

    def limit(self, limit: int) -> "SoqlQuery":
        """Cap the number of rows returned; values above 1000 are clamped."""
        self._check_integer("limit", limit, minimum=1)
        self._limit = min(limit, MAXIMUM_LIMIT)
        return self

    def offset(self, offset: int) -> "SoqlQuery":
        self._check_integer("offset", offset, minimum=0)
        self._offset = offset
        return self

    def full_text_search(self, needle: str) -> "SoqlQuery":
        self._search = needle
        return self

    @staticmethod
    def _check_integer(name: str, value: Any, minimum: int) -> None:
        # bool is an int subclass but never a meaningful row count
        if isinstance(value, bool) or not isinstance(value, int):
            raise SoqlTypeError(
                f"The {name} must be an integer, got {type(value).__name__}."
            )
        if value < minimum:
            raise SoqlBoundsError(
                f"The {name} cannot be less than {minimum}; got {value}."
            )

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_params(self) -> Dict[str, str]:
        """Return the populated clauses, already encoded, in canonical order."""
        params: Dict[str, str] = {
            SELECT_KEY: DELIMITER.join(self._select),
            ORDER_KEY: DELIMITER.join(self._order)
            or _encode(f"{DEFAULT_ORDER_COLUMN} {DEFAULT_ORDER_DIRECTION.value}"),
        }

        if self._where is not None:
            params[WHERE_KEY] = _encode(self._where)
        if self._group:
            params[GROUP_KEY] = DELIMITER.join(self._group)
        if self._having is not None:
            params[HAVING_KEY] = _encode(self._having)
        if self._offset is not None:
            params[OFFSET_KEY] = str(self._offset)
        if self._limit is not None:
            params[LIMIT_KEY] = str(self._limit)
        if self._search is not None:
            params[SEARCH_KEY] = _encode(self._search)

        return params

    def __str__(self) -> str:
        return "&".join(f"{key}={value}" for key, value in self.to_params().items())

    def __repr__(self) -> str:
        return f"SoqlQuery({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SoqlQuery):
            return NotImplemented
        return str(self) == str(other)
