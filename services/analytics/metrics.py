"""Per-product inventory metrics.

Every function works on any record exposing ``name``, ``price``, ``stock`` and
``safety_stock``: catalog products and post-sale ``StockProjection`` records
alike.
"""
import math
from datetime import date

from models.product import Food
from utils.exceptions import UndefinedMetricException


def stock_ratio(product) -> float:
    """On-hand units as a fraction of the target stock level."""
    if product.stock == 0:
        raise UndefinedMetricException(
            f"Stock ratio is undefined for '{product.name}': target stock is zero",
            error_code="METRIC_ZERO_STOCK",
            details={"product": product.name},
        )
    return product.safety_stock / product.stock


def is_stock_low(product, threshold: float) -> bool:
    return stock_ratio(product) < threshold


def units_needed(product) -> int:
    """Units required to refill ``product`` up to its target stock."""
    return product.stock - product.safety_stock


def inventory_turnover_rate(product, sold: int) -> float:
    """
    Units sold divided by the average of opening and closing inventory.

    Closing inventory is ``safety_stock - sold`` and is not clamped, so an
    oversold product can yield a negative or infinite rate.
    """
    if sold == 0:
        return 0.0
    average_inventory = (product.safety_stock + (product.safety_stock - sold)) / 2.0
    if average_inventory == 0.0:
        return math.inf
    return sold / average_inventory


def sales_efficiency(product, sold: int) -> float:
    """Units sold per unit on hand; infinite when nothing is on hand."""
    if product.safety_stock == 0:
        return math.inf
    return sold / product.safety_stock


def days_until_expiry(food: Food, today: date) -> int:
    """Calendar days until ``food`` expires; negative once it has expired."""
    return (food.expiration_date - today).days


def is_near_expiry(food: Food, today: date, warning_days: int) -> bool:
    return days_until_expiry(food, today) <= warning_days
