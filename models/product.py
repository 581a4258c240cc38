from dataclasses import dataclass
from datetime import date
from typing import Any, ClassVar, Dict, Optional

from models.enums import MAX_PRICE, ProductCategory
from utils.exceptions import ValidationException
from utils.validation.validators import (
    validate_date,
    validate_integer,
    validate_name,
    validate_non_negative_int,
    validate_positive_int,
)


@dataclass(frozen=True)
class Product:
    """
    Catalog entry shared by every product variant.

    Attributes:
        name (str): Unique name, also the join key with the sales ledger
        price (int): Unit price in whole currency units
        stock (int): Target ("reorder-up-to") stock level, always positive
        safety_stock (int): Units currently on hand
    """

    name: str
    price: int
    stock: int
    safety_stock: int

    CATEGORY: ClassVar[Optional[ProductCategory]] = None

    def __post_init__(self) -> None:
        if self.CATEGORY is None:
            raise ValidationException(
                "Product is abstract; use Food, Beverage, Snack or Household"
            )
        object.__setattr__(self, "name", validate_name(self.name))
        object.__setattr__(
            self, "price",
            validate_integer(self.price, min_value=0, max_value=MAX_PRICE, field_name="Price"),
        )
        # stock is the denominator of every stock ratio
        object.__setattr__(self, "stock", validate_positive_int(self.stock, "Stock"))
        object.__setattr__(
            self, "safety_stock", validate_non_negative_int(self.safety_stock, "Safety stock")
        )

    @property
    def category(self) -> ProductCategory:
        return self.CATEGORY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "category": self.category.value,
            "price": self.price,
            "stock": self.stock,
            "safety_stock": self.safety_stock,
        }


@dataclass(frozen=True)
class Food(Product):
    """Perishable product with an expiration date."""

    expiration_date: date = None

    CATEGORY: ClassVar[ProductCategory] = ProductCategory.FOOD

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.expiration_date is None:
            raise ValidationException(f"Food '{self.name}' requires an expiration date")
        object.__setattr__(self, "expiration_date", validate_date(self.expiration_date))

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "expiration_date": self.expiration_date.isoformat()}


@dataclass(frozen=True)
class Beverage(Product):
    """Drink product; ``volume`` (ml) is informational only."""

    volume: int = 0

    CATEGORY: ClassVar[ProductCategory] = ProductCategory.BEVERAGE

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "volume", validate_non_negative_int(self.volume, "Volume"))

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "volume": self.volume}


@dataclass(frozen=True)
class Snack(Product):
    CATEGORY: ClassVar[ProductCategory] = ProductCategory.SNACK


@dataclass(frozen=True)
class Household(Product):
    CATEGORY: ClassVar[ProductCategory] = ProductCategory.HOUSEHOLD


PRODUCT_TYPES: Dict[ProductCategory, type] = {
    ProductCategory.FOOD: Food,
    ProductCategory.BEVERAGE: Beverage,
    ProductCategory.SNACK: Snack,
    ProductCategory.HOUSEHOLD: Household,
}


@dataclass(frozen=True)
class StockProjection:
    """
    Post-sale view of a product: the same record with ``safety_stock`` reduced
    by the units sold. The projected quantity is not clamped and goes negative
    when a product was oversold.
    """

    product: Product
    safety_stock: int

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def price(self) -> int:
        return self.product.price

    @property
    def stock(self) -> int:
        return self.product.stock

    @property
    def category(self) -> ProductCategory:
        return self.product.category


def project_sale(product: Product, sold: int) -> StockProjection:
    """Return the projected record for ``product`` after ``sold`` units leave the shelf."""
    return StockProjection(product=product, safety_stock=product.safety_stock - sold)


def create_product(category: ProductCategory, **fields: Any) -> Product:
    """Build the product variant for ``category`` (given as enum or its string value)."""
    try:
        if not isinstance(category, ProductCategory):
            category = ProductCategory(str(category).strip().lower())
        product_type = PRODUCT_TYPES[category]
    except ValueError:
        raise ValidationException(f"Unknown product category: {category!r}")
    try:
        return product_type(**fields)
    except TypeError as e:
        raise ValidationException(f"Invalid fields for {product_type.__name__}: {e}")
