# SODA Client
# File: utils.py
# Version: v2

"""Small string helpers shared by the query builder and the dataset facade."""

from __future__ import annotations

import json
import re
from typing import Any

from .errors import InvalidResourceError

RESOURCE_ID_PATTERN = re.compile(r"^[a-z0-9]{4}-[a-z0-9]{4}$")


def validate_resource_id(resource_id: Any) -> str:
    """Return ``resource_id`` unchanged or raise :class:`InvalidResourceError`."""
    if not isinstance(resource_id, str) or not RESOURCE_ID_PATTERN.match(resource_id):
        raise InvalidResourceError(
            f"The resource ID {resource_id!r} didn't fit the expected "
            "criteria (four lowercase letters or digits, a dash, four more)."
        )
    return resource_id


def is_json(value: Any) -> bool:
    """True when ``value`` is a string holding a non-null JSON document."""
    if not isinstance(value, str):
        return False
    try:
        return json.loads(value) is not None
    except ValueError:
        return False


def is_null_or_empty(value: Any) -> bool:
    """True for ``None``, empty containers and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return len(value) == 0
    except TypeError:
        return False
