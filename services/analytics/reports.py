from typing import Any, Dict, List

from models.enums import OVERSTOCK_RATIO, ReportKey
from models.product import project_sale
from services.analytics.contracts import Report, ReportDataset
from services.analytics.metrics import (
    days_until_expiry,
    inventory_turnover_rate,
    is_near_expiry,
    is_stock_low,
    sales_efficiency,
    stock_ratio,
    units_needed,
)
from utils.helpers import format_percentage, format_price, format_ratio
from utils.math.financial_calculator import FinancialCalculator


def _not_found_line(name: str) -> str:
    return f"Warning: product '{name}' was not found in the catalog"


def _rank_by_quantity(entries):
    # sorted() is stable, so equal quantities keep ledger order
    return sorted(entries, key=lambda entry: entry[1], reverse=True)


class UrgentStockReport(Report):
    @property
    def key(self) -> ReportKey:
        return ReportKey.URGENT_STOCK

    @property
    def title(self) -> str:
        return "Urgent stock alert"

    @property
    def description(self) -> str:
        return "Products whose on-hand stock is below the low-stock threshold, in catalog order."

    def collect(self, dataset: ReportDataset) -> List[Dict[str, Any]]:
        threshold = dataset.context.stock_low_threshold
        return [
            {
                "name": p.name,
                "category": p.category.value,
                "safety_stock": p.safety_stock,
                "stock": p.stock,
                "needed": units_needed(p),
                "stock_rate": stock_ratio(p) * 100,
            }
            for p in dataset.products
            if is_stock_low(p, threshold)
        ]

    def summarize(self, rows, dataset):
        return {"count": len(rows), "threshold": dataset.context.stock_low_threshold}

    def render(self, rows, meta, dataset) -> List[str]:
        if not rows:
            return ["No low-stock items."]
        return [
            f"- {row['name']:<15} {'(' + row['category'] + ')':<11}: "
            f"{row['safety_stock']:>3} -> {row['stock']:>3} ({row['needed']:>3} needed) "
            f"[stock rate: {row['stock_rate']:.1f}%]"
            for row in rows
        ]


class ExpiryReport(Report):
    """
    Near-expiry food with its markdown. The discounted price is computed with
    exact decimal arithmetic and truncated, so 5500 at 30% off is 3850 (a float
    product would truncate 3849.999... to 3849).
    """

    @property
    def key(self) -> ReportKey:
        return ReportKey.EXPIRY

    @property
    def title(self) -> str:
        return "Expiry management"

    @property
    def description(self) -> str:
        return (
            "Food expiring within the warning window (expired items included), "
            "soonest first, with the discounted price from the discount policy."
        )

    def collect(self, dataset: ReportDataset) -> List[Dict[str, Any]]:
        context = dataset.context
        expiring = sorted(
            (f for f in dataset.foods()
             if is_near_expiry(f, dataset.today, context.expiry_warning_days)),
            key=lambda f: f.expiration_date,
        )
        rows = []
        for food in expiring:
            days_left = days_until_expiry(food, dataset.today)
            rate = context.discount_policy.rate_for(days_left)
            rows.append({
                "name": food.name,
                "expiration_date": food.expiration_date.isoformat(),
                "days_left": days_left,
                "discount_rate": rate,
                "price": food.price,
                "discounted_price": FinancialCalculator.calculate_discounted_price(food.price, rate),
            })
        return rows

    def summarize(self, rows, dataset):
        return {"count": len(rows), "warning_days": dataset.context.expiry_warning_days}

    def render(self, rows, meta, dataset) -> List[str]:
        if not rows:
            return ["No near-expiry items."]
        symbol = dataset.context.currency_symbol
        return [
            f"- {row['name']:<18} : {row['days_left']} day(s) left -> "
            f"{format_percentage(row['discount_rate'])} off "
            f"({format_price(row['price'], symbol)} -> {format_price(row['discounted_price'], symbol)})"
            for row in rows
        ]


class BestsellersReport(Report):
    @property
    def key(self) -> ReportKey:
        return ReportKey.BESTSELLERS

    @property
    def title(self) -> str:
        return "Today's bestsellers"

    @property
    def description(self) -> str:
        return "Top selling ledger entries by quantity with their revenue."

    def collect(self, dataset: ReportDataset) -> List[Dict[str, Any]]:
        ranked = _rank_by_quantity(dataset.ledger.items())[:dataset.context.bestseller_limit]
        rows = []
        for rank, (name, quantity) in enumerate(ranked, start=1):
            product = dataset.find(name)
            rows.append({
                "rank": rank,
                "name": name,
                "quantity": quantity,
                "found": product is not None,
                "revenue": (
                    FinancialCalculator.calculate_line_revenue(product.price, quantity)
                    if product is not None else None
                ),
            })
        return rows

    def summarize(self, rows, dataset):
        return {"warnings": [row["name"] for row in rows if not row["found"]]}

    def render(self, rows, meta, dataset) -> List[str]:
        if not rows:
            return ["No sales recorded."]
        symbol = dataset.context.currency_symbol
        lines = []
        for row in rows:
            if row["found"]:
                lines.append(
                    f"{row['rank']}. {row['name']:<18} : {row['quantity']:>2} sold "
                    f"(revenue {format_price(row['revenue'], symbol)})"
                )
            else:
                lines.append(_not_found_line(row["name"]))
        return lines


class SalesReport(Report):
    @property
    def key(self) -> ReportKey:
        return ReportKey.SALES

    @property
    def title(self) -> str:
        return "Sales overview"

    @property
    def description(self) -> str:
        return (
            "Total revenue and units over ledger entries that match the catalog, "
            "then per-product revenue by quantity sold."
        )

    def collect(self, dataset: ReportDataset) -> List[Dict[str, Any]]:
        matched = [
            (dataset.find(name), quantity)
            for name, quantity in dataset.ledger.items()
            if dataset.find(name) is not None
        ]
        return [
            {
                "name": product.name,
                "quantity": quantity,
                "unit_price": product.price,
                "revenue": FinancialCalculator.calculate_line_revenue(product.price, quantity),
            }
            for product, quantity in _rank_by_quantity(matched)
        ]

    def summarize(self, rows, dataset):
        return {
            "total_revenue": sum(row["revenue"] for row in rows),
            "total_items": sum(row["quantity"] for row in rows),
            "warnings": [name for name in dataset.ledger.names() if dataset.find(name) is None],
        }

    def render(self, rows, meta, dataset) -> List[str]:
        symbol = dataset.context.currency_symbol
        lines = [
            f"Total revenue today: {format_price(meta['total_revenue'], symbol)} "
            f"({meta['total_items']} items sold)",
            "-" * 48,
        ]
        if not len(dataset.ledger):
            lines.append("No sales recorded.")
        for row in rows:
            lines.append(
                f"  * {row['name']:<18}: {format_price(row['revenue'], symbol):<9} "
                f"({row['quantity']:>2} x {format_price(row['unit_price'], symbol)})"
            )
        lines.extend(_not_found_line(name) for name in meta["warnings"])
        return lines


class ManagementAnalysisReport(Report):
    @property
    def key(self) -> ReportKey:
        return ReportKey.MANAGEMENT_ANALYSIS

    @property
    def title(self) -> str:
        return "Management analysis"

    @property
    def description(self) -> str:
        return (
            "Turnover and sales-efficiency leaders among products in the ledger, "
            "overstocked unsold products and the reorder recommendation."
        )

    def collect(self, dataset: ReportDataset) -> List[Dict[str, Any]]:
        rows = []
        for product in dataset.products:
            if product.name not in dataset.ledger:
                continue
            sold = dataset.ledger.quantity_for(product.name)
            rows.append({
                "name": product.name,
                "sold": sold,
                "turnover_rate": inventory_turnover_rate(product, sold),
                "sales_efficiency": sales_efficiency(product, sold),
            })
        return rows

    def summarize(self, rows, dataset):
        # max()/min() return the first of equal candidates, i.e. catalog order
        moving = [row for row in rows if row["turnover_rate"] > 0]
        overstocked = [
            p for p in dataset.products
            if dataset.ledger.quantity_for(p.name) == 0
            and p.safety_stock > p.stock * OVERSTOCK_RATIO
        ]
        reorder = [p for p in dataset.products if is_stock_low(p, dataset.context.stock_low_threshold)]
        return {
            "max_turnover": max(rows, key=lambda r: r["turnover_rate"]) if rows else None,
            "min_turnover": min(moving, key=lambda r: r["turnover_rate"]) if moving else None,
            "max_efficiency": max(rows, key=lambda r: r["sales_efficiency"]) if rows else None,
            "overstocked": [{"name": p.name, "safety_stock": p.safety_stock} for p in overstocked],
            "reorder_count": len(reorder),
            "reorder_units": sum(units_needed(p) for p in reorder),
        }

    def render(self, rows, meta, dataset) -> List[str]:
        lines = []
        if meta["max_turnover"] is not None:
            best = meta["max_turnover"]
            lines.append("[Efficiency]")
            lines.append(f"- Highest turnover : {best['name']} ({format_ratio(best['turnover_rate'])})")
            if meta["min_turnover"] is not None:
                worst = meta["min_turnover"]
                lines.append(f"- Lowest turnover  : {worst['name']} ({format_ratio(worst['turnover_rate'])})")
            leader = meta["max_efficiency"]
            lines.append(
                f"- Best efficiency  : {leader['name']} ({format_percentage(leader['sales_efficiency'])})"
            )
            lines.append("")

        overstocked = ", ".join(f"{o['name']}({o['safety_stock']})" for o in meta["overstocked"]) or "none"
        lines.append("[Stock status]")
        lines.append(f"- Overstocked      : {overstocked}")
        lines.append(
            f"- Reorder advised  : {meta['reorder_count']} products, {meta['reorder_units']} units"
        )
        return lines


class OverallStatusReport(Report):
    @property
    def key(self) -> ReportKey:
        return ReportKey.OVERALL_STATUS

    @property
    def title(self) -> str:
        return "Overall status"

    @property
    def description(self) -> str:
        return "Catalog totals after subtracting today's sales from on-hand stock."

    def collect(self, dataset: ReportDataset) -> List[Dict[str, Any]]:
        threshold = dataset.context.stock_low_threshold
        rows = []
        for product in dataset.products:
            projection = project_sale(product, dataset.ledger.quantity_for(product.name))
            rows.append({
                "name": projection.name,
                "category": projection.category.value,
                "price": projection.price,
                "stock": projection.stock,
                "projected_safety_stock": projection.safety_stock,
                "low_stock": is_stock_low(projection, threshold),
            })
        return rows

    def summarize(self, rows, dataset):
        context = dataset.context
        return {
            "product_count": len(rows),
            "projected_units": sum(row["projected_safety_stock"] for row in rows),
            "inventory_value": FinancialCalculator.calculate_inventory_value(
                (row["price"], row["projected_safety_stock"]) for row in rows
            ),
            "low_stock_count": sum(1 for row in rows if row["low_stock"]),
            "near_expiry_count": sum(
                1 for f in dataset.foods()
                if is_near_expiry(f, dataset.today, context.expiry_warning_days)
            ),
            "units_sold": dataset.ledger.total_units(),
        }

    def render(self, rows, meta, dataset) -> List[str]:
        symbol = dataset.context.currency_symbol
        return [
            f"- Registered products : {meta['product_count']}",
            f"- Units on hand       : {meta['projected_units']}",
            f"- Inventory value     : {format_price(meta['inventory_value'], symbol)}",
            f"- Low-stock products  : {meta['low_stock_count']}",
            f"- Near expiry         : {meta['near_expiry_count']}",
            f"- Units sold today    : {meta['units_sold']}",
        ]


DEFAULT_REPORTS = (
    UrgentStockReport(),
    ExpiryReport(),
    BestsellersReport(),
    SalesReport(),
    ManagementAnalysisReport(),
    OverallStatusReport(),
)
