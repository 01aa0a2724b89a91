"""Half-up rounding on Decimal, shared by the sizing and pricing engines."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    # str() first so 1.7 becomes Decimal("1.7"), not its binary expansion
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero (0.5 -> 1)."""
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def multiply_round(base: int, *factors: Number) -> int:
    """Multiply an integer amount by decimal factors and round once."""
    result = Decimal(base)
    for f in factors:
        result *= to_decimal(f)
    return round_half_up(result)
