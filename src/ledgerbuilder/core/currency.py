#!/usr/bin/env python3
"""
Currency Token Parsing and Formatting Utilities

Handles the textual side of amounts as they appear in ledger files and in
interactive commands. All arithmetic is exact: amounts are Decimal values and
any rounding-sensitive work (halving, formatting) happens on integer minor
units. Unary minus and abs() would round in the current Decimal context, so
copy_negate() and copy_abs() are used instead.

Amount token shapes understood:
- Prefix symbol:   "€5.00", "-€5.00", "€-5.00", "$ 1,234.50"
- Suffix symbol:   "5.00EUR", "5.00 EUR", "-12 CZK"
- Bare number:     "5.00" (currency is empty; callers decide if that's valid)

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Never lose digits when formatting (precision is a minimum, not a cap)
- Thousands separators must be well-formed ("5,00" is rejected, not 500)
"""

import re
from dataclasses import dataclass, replace
from decimal import Decimal

PREFIX = "prefix"
SUFFIX = "suffix"

DEFAULT_PRECISION = 2

_AMOUNT_RE = re.compile(
    r"""
    ^(?P<lead_sign>[-+]?)
    (?P<prefix>[^\d\s.,+\-;@=()\[\]]+)?
    (?P<prefix_gap>\s*)
    (?P<sign>[-+]?)
    (?P<number>\d{1,3}(?:,\d{3})+(?:\.\d*)?|\d+(?:\.\d*)?|\.\d+)
    (?P<suffix_gap>\s*)
    (?P<suffix>[^\d\s.,+\-;@=()\[\]]+)?$
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class AmountStyle:
    """How one currency is written: symbol position, spacing and precision."""

    position: str = PREFIX
    spaced: bool = False
    precision: int = DEFAULT_PRECISION

    def with_precision(self, precision: int) -> "AmountStyle":
        """Return a copy with a different minimum precision."""
        return replace(self, precision=precision)


DEFAULT_STYLE = AmountStyle()


@dataclass(frozen=True)
class ParsedAmount:
    """Result of splitting an amount token into currency, value and style."""

    currency: str
    amount: Decimal
    style: AmountStyle


def decimal_scale(amount: Decimal) -> int:
    """
    Number of fractional digits carried by a Decimal.

    Examples:
        decimal_scale(Decimal("5.01")) -> 2
        decimal_scale(Decimal("120")) -> 0
    """
    exponent = amount.as_tuple().exponent
    if not isinstance(exponent, int):
        raise ValueError(f"Not a finite amount: {amount}")
    return max(-exponent, 0)


def to_minor_units(amount: Decimal, scale: int) -> int:
    """
    Convert an amount to integer minor units at the given scale.

    The scale must be at least decimal_scale(amount) so nothing is truncated.

    Example:
        to_minor_units(Decimal("5.01"), 2) -> 501
    """
    if scale < decimal_scale(amount):
        raise ValueError(f"Scale {scale} would truncate {amount}")
    sign, digits, exponent = amount.as_tuple()
    units = int("".join(map(str, digits)) or "0") * 10 ** (exponent + scale)
    return -units if sign else units


def from_minor_units(units: int, scale: int) -> Decimal:
    """
    Convert integer minor units back to a Decimal with exactly `scale` digits.

    Example:
        from_minor_units(250, 2) -> Decimal("2.50")
    """
    return Decimal(f"{units}E-{scale}")


def split_minor_units_in_half(units: int) -> tuple[int, int]:
    """
    Split minor units into two shares that sum exactly to `units`.

    The first share is floor(units / 2); the second takes the remainder. For
    odd amounts the first share is therefore always the smaller one
    (501 -> 250, 251 and -501 -> -251, -250).
    """
    first = units // 2
    return first, units - first


def format_decimal(amount: Decimal, precision: int = DEFAULT_PRECISION) -> str:
    """
    Format an amount with at least `precision` fractional digits.

    Uses integer arithmetic; extra digits carried by the amount are kept.

    Examples:
        format_decimal(Decimal("5")) -> "5.00"
        format_decimal(Decimal("-2.5")) -> "-2.50"
        format_decimal(Decimal("0.125")) -> "0.125"
    """
    scale = max(precision, decimal_scale(amount))
    units = to_minor_units(amount.copy_abs(), scale)
    whole, frac = divmod(units, 10**scale)
    sign = "-" if amount < 0 else ""
    if scale == 0:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{frac:0{scale}d}"


def split_amount_token(text: str) -> ParsedAmount | None:
    """
    Split an amount token into currency symbol, signed value and style.

    Returns None when the text is not an amount. A bare number yields an empty
    currency.

    Examples:
        split_amount_token("€5.00") -> ParsedAmount("€", Decimal("5.00"), prefix)
        split_amount_token("-12 CZK") -> ParsedAmount("CZK", Decimal("-12"), suffix, spaced)
    """
    match = _AMOUNT_RE.match(text.strip())
    if match is None:
        return None

    prefix = match.group("prefix") or ""
    suffix = match.group("suffix") or ""
    if prefix and suffix:
        return None
    if match.group("lead_sign") and match.group("sign"):
        return None
    if match.group("prefix_gap") and not prefix:
        return None

    number = Decimal(match.group("number").replace(",", ""))
    if "-" in (match.group("lead_sign"), match.group("sign")):
        number = number.copy_negate()

    if suffix:
        style = AmountStyle(SUFFIX, bool(match.group("suffix_gap")), decimal_scale(number))
    else:
        style = AmountStyle(PREFIX, bool(match.group("prefix_gap")), decimal_scale(number))

    return ParsedAmount(currency=prefix or suffix, amount=number, style=style)


def format_amount(amount: Decimal, currency: str, style: AmountStyle = DEFAULT_STYLE) -> str:
    """
    Render an amount with its currency symbol in the given style.

    The minus sign leads a prefix symbol ("-€5.00") and leads the number for a
    suffix symbol ("-5.00 EUR").
    """
    number = format_decimal(amount.copy_abs(), style.precision)
    sign = "-" if amount < 0 else ""
    gap = " " if style.spaced else ""
    if not currency:
        return f"{sign}{number}"
    if style.position == SUFFIX:
        return f"{sign}{number}{gap}{currency}"
    return f"{sign}{currency}{gap}{number}"
