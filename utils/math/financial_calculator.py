from decimal import Decimal, ROUND_DOWN
from typing import Iterable, Tuple, Union

class FinancialCalculator:
    """
    Centralized calculator for money arithmetic shared by the reports.

    Prices are whole currency units; discounted amounts are truncated toward
    zero, never rounded up.
    """

    @staticmethod
    def _to_decimal(value: Union[int, float, Decimal, str]) -> Decimal:
        if isinstance(value, float):
            return Decimal(str(value)) # Convert float to string first to avoid precision issues
        return Decimal(value)

    @staticmethod
    def calculate_line_revenue(unit_price: int, quantity: int) -> int:
        """Revenue for a ledger line: unit_price * quantity."""
        return unit_price * quantity

    @staticmethod
    def calculate_discounted_price(price: int, discount_rate: float) -> int:
        """
        Price after applying ``discount_rate``.
        Formula: trunc(price * (1 - discount_rate))
        """
        amount = FinancialCalculator._to_decimal(price) * (
            Decimal(1) - FinancialCalculator._to_decimal(discount_rate)
        )
        return int(amount.quantize(Decimal('1'), rounding=ROUND_DOWN))

    @staticmethod
    def calculate_inventory_value(holdings: Iterable[Tuple[int, int]]) -> int:
        """
        Total value of (unit_price, quantity) pairs.
        Negative quantities (oversold stock) contribute negative value.
        """
        return sum(price * quantity for price, quantity in holdings)
