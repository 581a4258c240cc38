"""Load a store (catalog, sales ledger, optional policy) from a YAML document.

Example document::

    today: 2024-05-01
    policy:
      stock_low_threshold: 0.3
      expiry_warning_days: 3
      discount_policy: {3: 0.0, 2: 0.3, 1: 0.5, 0: 0.7}
    products:
      - {name: Tuna onigiri, category: food, price: 1500, stock: 15,
         safety_stock: 12, expires_in_days: 1}
      - {name: Cola 500ml, category: beverage, price: 1500, stock: 25,
         safety_stock: 8, volume: 500}
    sales:
      Tuna onigiri: 10
"""
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from models.policy import ReportContext
from models.product import Product, create_product
from models.sales import SalesLedger
from utils.decorators import validate_input
from utils.exceptions import DataFormatException, ValidationException
from utils.system.logger import LogLevel, log_method, logger
from utils.validation.validators import validate_date, validate_integer

POLICY_KEYS = (
    "stock_low_threshold",
    "expiry_warning_days",
    "discount_policy",
    "bestseller_limit",
    "currency_symbol",
)


@dataclass(frozen=True)
class StoreData:
    products: Tuple[Product, ...]
    sales: SalesLedger
    context: ReportContext
    today: date


def _build_product(raw: Any, position: int, today: date) -> Product:
    if not isinstance(raw, Mapping):
        raise DataFormatException(f"Product #{position} must be a mapping")
    fields = dict(raw)
    category = fields.pop("category", None)
    if category is None:
        raise DataFormatException(f"Product #{position} has no category")

    try:
        if "expires_in_days" in fields:
            offset = validate_integer(fields.pop("expires_in_days"), field_name="expires_in_days")
            fields["expiration_date"] = today + timedelta(days=offset)
        return create_product(category, **fields)
    except ValidationException as e:
        raise DataFormatException(
            f"Invalid product #{position}: {e.message}", details={"product": fields.get("name")}
        )


def _build_context(raw: Optional[Mapping[str, Any]]) -> ReportContext:
    raw = raw or {}
    if not isinstance(raw, Mapping):
        raise DataFormatException("policy must be a mapping")
    unknown = set(raw) - set(POLICY_KEYS)
    if unknown:
        raise DataFormatException(f"Unknown policy keys: {sorted(unknown)}")
    try:
        return ReportContext.from_config(raw)
    except ValidationException as e:
        raise DataFormatException(f"Invalid policy: {e.message}")


@validate_input()
def parse_store(document: Mapping[str, Any], today: Optional[date] = None) -> StoreData:
    """Build a StoreData from an already-parsed document."""
    if not isinstance(document, Mapping):
        raise DataFormatException("Store document must be a mapping")

    if today is None:
        today = validate_date(document["today"]) if "today" in document else date.today()

    raw_products: List[Any] = document.get("products") or []
    if not isinstance(raw_products, list):
        raise DataFormatException("products must be a list")
    products = tuple(_build_product(raw, i, today) for i, raw in enumerate(raw_products, start=1))

    raw_sales: Dict[str, Any] = document.get("sales") or {}
    if not isinstance(raw_sales, Mapping):
        raise DataFormatException("sales must be a mapping of product name to quantity")
    try:
        sales = SalesLedger.from_mapping({str(k): v for k, v in raw_sales.items()})
    except ValidationException as e:
        raise DataFormatException(f"Invalid sales: {e.message}")

    return StoreData(
        products=products,
        sales=sales,
        context=_build_context(document.get("policy")),
        today=today,
    )


@log_method(LogLevel.INFO)
def load_store(path: Union[str, Path], today: Optional[date] = None) -> StoreData:
    """Read and parse a YAML store file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except OSError as e:
        raise DataFormatException(f"Cannot read store file {path}: {e}")
    except yaml.YAMLError as e:
        raise DataFormatException(f"Malformed store file {path}: {e}")

    store = parse_store(document or {}, today=today)
    logger.info(
        "Store loaded",
        extra={"path": str(path), "products": len(store.products), "sales_entries": len(store.sales)},
    )
    return store
