"""Normalization of loosely typed form input.

Form clients post every value as a string, so numbers, dates and integers are
parsed here. A value can be omitted, explicitly blank (``""`` or ``null``) or
carry content; update paths treat those three cases differently.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel

from ..core.errors import ValidationError


class _Unset:
    """Marker for a field the caller did not send."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()
CENTS = Decimal("0.01")
# Numeric(14, 2) holds twelve integer digits.
MONEY_LIMIT = Decimal(10) ** 12


def is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def clean_text(value: object) -> str | None:
    """Return the trimmed string, or None for blank input."""

    if is_blank(value):
        return None
    return str(value).strip()


def require_text(value: object, field: str) -> str:
    text = clean_text(value)
    if text is None:
        raise ValidationError(f"{field} is required")
    return text


def parse_decimal(value: object, field: str, *, lenient: bool = False) -> Decimal | None:
    """Parse a finite number.

    Blank input yields None. Malformed input raises ``ValidationError`` unless
    ``lenient`` is set, in which case it is treated as blank.
    """

    if is_blank(value):
        return None
    number = _to_decimal(value)
    if number is None:
        if lenient:
            return None
        raise ValidationError(f"{field} must be numeric")
    return number


def parse_money(value: object, field: str, *, lenient: bool = False) -> Decimal | None:
    """Parse a currency amount rounded to cents, as the value columns store it."""

    number = parse_decimal(value, field, lenient=lenient)
    if number is None:
        return None
    if abs(number) >= MONEY_LIMIT:
        raise ValidationError(f"{field} is out of range")
    return to_money(number)


def to_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_int(value: object, field: str, *, lenient: bool = False) -> int | None:
    """Parse an integral number such as a year or an identifier."""

    if is_blank(value):
        return None
    number = _to_decimal(value)
    if number is None or number != number.to_integral_value():
        if lenient:
            return None
        raise ValidationError(f"{field} must be an integer")
    return int(number)


def parse_date(value: object, field: str) -> date | None:
    """Parse an ISO date; datetimes are truncated to their date."""

    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise ValidationError(f"{field} must be an ISO date") from exc


def decimal_update(
    payload: BaseModel, name: str, field: str, *, lenient: bool = False
) -> Decimal | None | _Unset:
    """Resolve a currency column update.

    Returns ``UNSET`` when the field was omitted (or malformed under the lenient
    policy), ``None`` when it was sent blank, otherwise the parsed value.
    """

    if name not in payload.model_fields_set:
        return UNSET
    raw = getattr(payload, name)
    if is_blank(raw):
        return None
    parsed = parse_money(raw, field, lenient=lenient)
    return UNSET if parsed is None else parsed


def text_update(payload: BaseModel, name: str) -> str | None | _Unset:
    """Resolve a text column update: omitted, cleared or replaced."""

    if name not in payload.model_fields_set:
        return UNSET
    return clean_text(getattr(payload, name))


def _to_decimal(value: object) -> Decimal | None:
    if isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number
