"""Fixed-point helpers: balances are stored as integer cents."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str | None, *, strict: bool = False) -> Decimal:
    """Coerce an inbound amount to a two-place decimal; blanks count as zero.

    With ``strict`` an amount carrying sub-cent digits is rejected instead of
    rounded.
    """
    if value is None or value == "":
        return Decimal("0.00")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"invalid amount: {value!r}")
    try:
        quantized = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"amount out of range: {value!r}") from exc
    if strict and quantized != amount:
        raise ValueError(f"amount has more than two decimal places: {value!r}")
    return quantized


def to_cents(value: Decimal) -> int:
    return int(to_decimal(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def format_amount(value: Decimal) -> str:
    """Render an amount with exactly two fraction digits."""
    return f"{to_decimal(value):.2f}"


__all__ = ["CENT", "to_decimal", "to_cents", "from_cents", "format_amount"]
