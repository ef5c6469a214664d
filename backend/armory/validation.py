from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from armory.time_utils import parse_iso_date


# Wire codes carried by every ValidationError
ERROR_INVALID_INPUT = "InvalidInput"
ERROR_FORBIDDEN = "Forbidden"
ERROR_UNAUTHENTICATED = "Unauthenticated"

# Largest quantity a record may carry (SQL INTEGER range)
# This prevents database overflow issues
MAX_QUANTITY = 2_147_483_647


class ValidationError(ValueError):
    """Rejected request. Carries a wire code and the HTTP status the boundary maps it to."""

    code = ERROR_INVALID_INPUT
    status_code = 400

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        body = {"error": self.message, "code": self.code}
        if self.field:
            body["field"] = self.field
        return body


class InvalidInputError(ValidationError):
    """400-level input problem (missing field, bad quantity, same-base transfer...)."""

    code = ERROR_INVALID_INPUT
    status_code = 400


class ForbiddenError(ValidationError):
    """403-level role or base-ownership violation."""

    code = ERROR_FORBIDDEN
    status_code = 403


class UnauthenticatedError(ValidationError):
    """401-level: no resolvable viewer."""

    code = ERROR_UNAUTHENTICATED
    status_code = 401


def pick(payload: dict, *names: str) -> Any:
    """First present (non-None) value among alias keys."""
    for name in names:
        if name in payload and payload[name] is not None:
            return payload[name]
    return None


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def coerce_quantity(value: Any, *, field: str = "quantity") -> int:
    """
    Strict positive-integer coercion.

    Rejects bools, floats and scientific notation; accepts plain digit strings.
    """
    # Already an int (but not bool which is a subclass of int)
    if isinstance(value, int) and not isinstance(value, bool):
        qty = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise InvalidInputError(f"{field} must be an integer", field=field)
        # Reject scientific notation (e.g., "1e15", "1E10")
        if "e" in stripped.lower():
            raise InvalidInputError(f"{field} must be a plain integer (scientific notation not allowed)", field=field)
        # Reject decimal points (e.g., "12.5")
        if "." in stripped:
            raise InvalidInputError(f"{field} must be an integer (no decimals)", field=field)
        try:
            qty = int(stripped)
        except ValueError:
            raise InvalidInputError(f"{field} must be an integer", field=field)
    elif isinstance(value, float):
        raise InvalidInputError(f"{field} must be an integer, not a decimal", field=field)
    else:
        raise InvalidInputError(f"{field} must be an integer", field=field)

    if qty <= 0:
        raise InvalidInputError(f"{field} must be positive", field=field)
    if qty > MAX_QUANTITY:
        raise InvalidInputError(f"{field} cannot exceed {MAX_QUANTITY}", field=field)
    return qty


def coerce_date(value: Any, *, field: str = "date") -> date:
    try:
        parsed = parse_iso_date(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be an ISO-8601 date (YYYY-MM-DD)", field=field)
    if parsed is None:
        raise InvalidInputError(f"{field} is required", field=field)
    return parsed


def coerce_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def coerce_choice(value: Any, choices: Iterable[str], *, field: str) -> str:
    text = coerce_text(value)
    allowed = list(choices)
    if text not in allowed:
        raise InvalidInputError(
            f"{field} must be one of: {', '.join(allowed)}",
            field=field,
        )
    return text
