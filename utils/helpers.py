import math
from decimal import Decimal
from typing import Union


def format_price(amount: Union[int, float, Decimal], symbol: str = "₩") -> str:
    """
    Format a whole-unit price with comma thousand separators.

    Args:
        amount (Union[int, float, Decimal]): The price amount to format.
        symbol (str, optional): Currency symbol prefix. Defaults to "₩".

    Returns:
        str: The formatted price string, e.g. ``₩5,500``.
    """
    return f"{symbol}{int(amount):,}"


def format_percentage(fraction: float, decimals: int = 0) -> str:
    """
    Format a fraction (0.25) as a percentage string ("25%").

    Infinite fractions render as ``inf%``.
    """
    if math.isinf(fraction):
        return "inf%"
    return f"{fraction * 100:.{decimals}f}%"


def format_ratio(value: float, decimals: int = 2) -> str:
    if math.isinf(value):
        return "inf"
    return f"{value:.{decimals}f}"

