import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from ..config import settings

TRUTHY_FLAGS = {"on", "true", "1", "yes"}


def _normalize_number(value) -> str:
    normalized = str(value).strip().replace(" ", "")
    if "," in normalized and "." not in normalized:
        normalized = normalized.replace(",", ".")
    return normalized


def parse_amount(value) -> float:
    """Turn form input into a float; blank or invalid input becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        normalized = _normalize_number(value)
        if not normalized:
            return 0.0
        try:
            number = float(normalized)
        except ValueError:
            return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def parse_quantity(value) -> float:
    return max(parse_amount(value), 0.0)


def parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY_FLAGS


def _money(value) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        amount = Decimal("0")
    if not amount.is_finite():
        amount = Decimal("0")
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_currency(value) -> str:
    # de-DE grouping: "." for thousands, "," for decimals.
    amount = _money(value)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.2f}"
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{localized} {settings.currency_symbol}"


def format_percentage(value) -> str:
    return f"{float(value):.5f}%"


def format_number(value) -> str:
    """Echo a stored number back into an input field without float noise."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
