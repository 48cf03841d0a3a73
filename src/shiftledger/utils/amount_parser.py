"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")

# Money columns are Numeric(10, 2)
MAX_AMOUNT = Decimal("99999999.99")


def to_money(value: Decimal | int | str) -> Decimal:
    """Convert a value into a two-place Decimal.

    Floats are rejected; money must arrive as Decimal, int or text.

    Raises:
        ValueError: If the value is not a finite number, or its magnitude
            exceeds MAX_AMOUNT
    """
    if isinstance(value, float):
        raise ValueError(f"Amount {value!r} must be a Decimal, not a float")
    try:
        amount = Decimal(value) if not isinstance(value, Decimal) else value
        if not amount.is_finite():
            raise ValueError(f"Amount '{value}' is not a finite number")
        if abs(amount) > MAX_AMOUNT:
            raise ValueError(f"Amount {value} exceeds the maximum of {MAX_AMOUNT}")
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Could not parse amount '{value}': {e}")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a two-place Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount quantized to cents

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    amount = to_money(amount_str)
    return -amount if is_negative else amount
