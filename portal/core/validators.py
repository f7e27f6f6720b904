from portal.core.exceptions import InvalidArgumentError
from typing import Any

import re

# RFC 4122 UUID, versions 1-5, case-insensitive
_UUID_RE = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$',
    re.IGNORECASE
)


def validate_uuid(value: Any, field: str = "id") -> str:
    """
    Validates that the given value is a UUID string.

    Raises:
        InvalidArgumentError: If the value is missing, not a string, or malformed.
    """
    if not value or not isinstance(value, str):
        raise InvalidArgumentError(f"{field} is required")
    if not _UUID_RE.match(value):
        raise InvalidArgumentError(f"Invalid {field} format")
    return value
