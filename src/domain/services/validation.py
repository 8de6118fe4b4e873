"""Required-field checks shared by the services."""

from collections.abc import Mapping
from typing import Any

from core.exceptions import ValidationFailedError


def is_blank(value: Any) -> bool:
    """True for None, empty containers and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


def require_fields(data: Mapping[str, Any], required: Mapping[str, str]) -> None:
    """Raise ValidationFailedError listing every required field that is blank.

    ``required`` maps field name to the message reported for it.
    """
    errors = [
        {"field": name, "message": message}
        for name, message in required.items()
        if is_blank(data.get(name))
    ]
    if errors:
        raise ValidationFailedError(errors)
