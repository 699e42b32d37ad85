import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, Inexact, InvalidOperation, localcontext
from typing import Any

from ledger_feed.errors import DataFormatError

# Provider amounts are plain signed decimals: no exponents, separators or underscores
_AMOUNT_PATTERN = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?")

MAX_AMOUNT_DIGITS = 30
# Working precision for balances and display; leaves headroom over MAX_AMOUNT_DIGITS
WORKING_PRECISION = 64


@dataclass(frozen=True)
class CurrencyFormat:
    """Display rules for amounts. ``!`` in a pattern is the symbol, ``#`` the number."""

    symbol: str = ""
    decimal: str = ","
    separator: str = "."
    precision: int = 2
    pattern: str = "!#"
    negative_pattern: str = "-!#"


def parse_amount(value: Any, *, field: str = "amount") -> Decimal:
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int) and not isinstance(value, bool):
        amount = Decimal(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _AMOUNT_PATTERN.fullmatch(text):
            raise DataFormatError(f"Invalid {field} '{value}': not a decimal number")
        amount = Decimal(text)
    else:
        # floats are refused so binary rounding never reaches the balance
        raise DataFormatError(f"Invalid {field} {value!r}: expected a decimal string")

    if not amount.is_finite():
        raise DataFormatError(f"Invalid {field} '{value}': not a finite number")
    if len(amount.as_tuple().digits) > MAX_AMOUNT_DIGITS:
        raise DataFormatError(f"Invalid {field} '{value}': more than {MAX_AMOUNT_DIGITS} digits")
    return amount


def subtract(minuend: Decimal, subtrahend: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = WORKING_PRECISION
        ctx.traps[Inexact] = True
        try:
            return minuend - subtrahend
        except Inexact as exc:
            raise DataFormatError(
                f"Balance {minuend} - {subtrahend} cannot be represented exactly"
            ) from exc


def _group_thousands(digits: str, separator: str) -> str:
    if not separator or len(digits) <= 3:
        return digits
    head = len(digits) % 3
    groups = [digits[:head]] if head else []
    groups.extend(digits[i:i + 3] for i in range(head, len(digits), 3))
    return separator.join(groups)


def format_amount(amount: Decimal, currency_format: CurrencyFormat) -> str:
    exponent = Decimal(1).scaleb(-currency_format.precision)
    with localcontext() as ctx:
        ctx.prec = WORKING_PRECISION
        try:
            rounded = amount.quantize(exponent, rounding=ROUND_HALF_UP)
            absolute = abs(rounded)
        except InvalidOperation as exc:
            raise DataFormatError(f"Amount {amount} is too large to display") from exc

    integer_part, _, fraction_part = f"{absolute:f}".partition(".")
    number = _group_thousands(integer_part, currency_format.separator)
    if currency_format.precision > 0:
        number = f"{number}{currency_format.decimal}{fraction_part}"

    negative = rounded < 0
    pattern = currency_format.negative_pattern if negative else currency_format.pattern
    return pattern.replace("!", currency_format.symbol).replace("#", number)


def format_balance(value: Any, currency_format: CurrencyFormat) -> str:
    """Format a provider balance string for an account summary."""
    return format_amount(parse_amount(value, field="balance"), currency_format)
