from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from models.enums import DEFAULT_BESTSELLER_LIMIT
from utils.exceptions import ValidationException
from utils.validation.validators import (
    validate_integer,
    validate_non_negative_int,
    validate_positive_int,
    validate_rate,
)


def _coerce_days(value: Any) -> int:
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationException(f"Discount tier key must be an integer, got {value!r}")
    return validate_integer(value, field_name="Discount tier")


@dataclass(frozen=True)
class DiscountPolicy:
    """
    Discount rate per exact number of days left before expiry.

    Keys may arrive as strings (JSON/YAML documents) and are coerced to int.
    Days without a tier get no discount.
    """

    tiers: Tuple[Tuple[int, float], ...] = ()

    def __post_init__(self) -> None:
        rates: Dict[int, float] = {}
        for days, rate in self.tiers:
            days = _coerce_days(days)
            if days in rates:
                raise ValidationException(f"Duplicate discount tier for {days} days")
            rates[days] = validate_rate(rate, f"Discount rate for {days} days")
        object.__setattr__(self, "tiers", tuple(sorted(rates.items(), reverse=True)))
        object.__setattr__(self, "_rates", rates)

    @classmethod
    def from_mapping(cls, mapping: Union["DiscountPolicy", Mapping[Any, float], None]) -> "DiscountPolicy":
        if isinstance(mapping, DiscountPolicy):
            return mapping
        if mapping is None:
            return cls()
        if not isinstance(mapping, Mapping):
            raise ValidationException("Discount policy must be a mapping of days to rate")
        return cls(tuple(mapping.items()))

    def rate_for(self, days_until_expiry: int) -> float:
        return self._rates.get(days_until_expiry, 0.0)

    def to_dict(self) -> Dict[str, float]:
        return {str(days): rate for days, rate in self.tiers}


@dataclass(frozen=True)
class ReportContext:
    """
    Read-only policy bundle shared by every report in a session.

    Attributes:
        stock_low_threshold (float): On-hand / target ratio below which stock is low, in (0, 1)
        expiry_warning_days (int): Food expiring within this many days is flagged
        discount_policy (DiscountPolicy): Markdown tiers for near-expiry food
        bestseller_limit (int): Number of entries in the bestsellers ranking
        currency_symbol (str): Prefix used when rendering prices
    """

    stock_low_threshold: float
    expiry_warning_days: int
    discount_policy: DiscountPolicy = field(default_factory=DiscountPolicy)
    bestseller_limit: int = DEFAULT_BESTSELLER_LIMIT
    currency_symbol: str = "₩"

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "stock_low_threshold",
            validate_rate(self.stock_low_threshold, "Stock low threshold", lower_inclusive=False),
        )
        object.__setattr__(
            self, "expiry_warning_days",
            validate_non_negative_int(self.expiry_warning_days, "Expiry warning days"),
        )
        object.__setattr__(self, "discount_policy", DiscountPolicy.from_mapping(self.discount_policy))
        object.__setattr__(
            self, "bestseller_limit", validate_positive_int(self.bestseller_limit, "Bestseller limit")
        )

    @classmethod
    def from_config(cls, overrides: Optional[Mapping[str, Any]] = None) -> "ReportContext":
        """Build the context from the application configuration, applying ``overrides``."""
        from config import Config

        settings = {
            "stock_low_threshold": Config.get("stock_low_threshold"),
            "expiry_warning_days": Config.get("expiry_warning_days"),
            "discount_policy": Config.get("discount_policy"),
            "bestseller_limit": Config.get("bestseller_limit", DEFAULT_BESTSELLER_LIMIT),
            "currency_symbol": Config.get("currency_symbol", "₩"),
        }
        settings.update(overrides or {})
        return cls(**settings)
