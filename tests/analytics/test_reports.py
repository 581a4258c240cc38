from datetime import date, timedelta

import pytest

from models.policy import ReportContext
from models.product import Beverage, Food, Household, Snack
from services.analytics.engine import InventoryAnalyticsEngine


TODAY = date(2024, 5, 1)


def make_engine(products, sales=None, today=None, **policy):
    settings = {"stock_low_threshold": 0.3, "expiry_warning_days": 3,
                "discount_policy": {3: 0.0, 2: 0.3, 1: 0.5, 0: 0.7}}
    settings.update(policy)
    return InventoryAnalyticsEngine(products, sales or {}, ReportContext(**settings), today=today or TODAY)


class TestUrgentStockReport:
    def test_low_stock_selection_in_catalog_order(self, today):
        engine = make_engine([
            Snack("Shrimp crackers", 1500, 100, 10),
            Beverage("Cola", 2000, 100, 30, 500),
            Food("Lunchbox", 5000, 100, 29, today),
        ])
        result = engine.urgent_stock_report()
        assert [row["name"] for row in result.data] == ["Shrimp crackers", "Lunchbox"]
        assert result.data[0]["category"] == "snack"
        assert result.data[1]["needed"] == 71
        assert result.data[1]["stock_rate"] == pytest.approx(29.0)

    def test_line_contents(self, engine):
        result = engine.urgent_stock_report()
        assert len(result.lines) == 3
        first = result.lines[0]
        assert "새우깡" in first
        assert "(snack)" in first
        assert "5 ->  30" in first
        assert "25 needed" in first
        assert "[stock rate: 16.7%]" in first

    def test_empty(self):
        result = make_engine([Snack("Pie", 3000, 20, 15)]).urgent_stock_report()
        assert result.data == []
        assert result.lines == ["No low-stock items."]


class TestExpiryReport:
    def test_sorted_soonest_first_with_discounts(self, engine):
        result = engine.expiry_report()
        assert [row["name"] for row in result.data] == ["딸기 샌드위치", "참치마요 삼각김밥", "김치찌개 도시락"]
        assert [row["days_left"] for row in result.data] == [0, 1, 2]
        assert [row["discounted_price"] for row in result.data] == [840, 750, 3850]
        assert "70% off" in result.lines[0]
        assert "(₩2,800 -> ₩840)" in result.lines[0]

    def test_expired_food_is_kept_with_negative_days(self, today):
        result = make_engine([Food("Old bread", 1000, 10, 5, today - timedelta(days=1))]).expiry_report()
        assert result.data[0]["days_left"] == -1
        assert result.data[0]["discount_rate"] == 0.0
        assert result.data[0]["discounted_price"] == 1000

    def test_expiring_today_with_zero_day_window(self, today):
        result = make_engine([Food("Sandwich", 2800, 10, 2, today)], expiry_warning_days=0).expiry_report()
        assert result.data[0]["days_left"] == 0
        assert result.data[0]["discount_rate"] == 0.7

    def test_ties_keep_catalog_order(self, today):
        soon = today + timedelta(days=1)
        result = make_engine([
            Food("B", 1000, 10, 5, soon),
            Food("A", 1000, 10, 5, soon),
            Food("C", 1000, 10, 5, today),
        ]).expiry_report()
        assert [row["name"] for row in result.data] == ["C", "B", "A"]

    def test_only_food_is_considered(self, today):
        result = make_engine([Snack("Chips", 1000, 10, 1), Household("Tissue", 2000, 30, 10)]).expiry_report()
        assert result.lines == ["No near-expiry items."]


class TestBestsellersReport:
    def test_top_five(self):
        sales = {"A": 15, "B": 12, "C": 10, "D": 8, "E": 7, "F": 3, "G": 2}
        products = [Snack(name, 100, 50, 40) for name in sales]
        result = make_engine(products, sales).bestsellers_report()
        assert [row["name"] for row in result.data] == ["A", "B", "C", "D", "E"]
        assert [row["rank"] for row in result.data] == [1, 2, 3, 4, 5]
        assert result.data[0]["revenue"] == 1500

    def test_ties_keep_ledger_order(self):
        sales = {"Late": 4, "Early": 4, "Top": 9}
        products = [Snack(name, 100, 50, 40) for name in ("Early", "Late", "Top")]
        result = make_engine(products, sales).bestsellers_report()
        assert [row["name"] for row in result.data] == ["Top", "Late", "Early"]

    def test_orphan_sale_becomes_warning(self):
        result = make_engine([Snack("A", 100, 50, 40)], {"Ghost": 9, "A": 3}).bestsellers_report()
        assert result.lines[0] == "Warning: product 'Ghost' was not found in the catalog"
        assert result.lines[1].startswith("2. A")
        assert result.warnings == ["Ghost"]

    def test_limit_from_context(self):
        sales = {"A": 3, "B": 2, "C": 1}
        products = [Snack(name, 100, 50, 40) for name in sales]
        result = make_engine(products, sales, bestseller_limit=2).bestsellers_report()
        assert len(result.data) == 2

    def test_empty(self):
        assert make_engine([Snack("A", 100, 50, 40)]).bestsellers_report().lines == ["No sales recorded."]


class TestSalesReport:
    def test_totals_and_order(self, engine):
        result = engine.sales_report()
        assert result.meta["total_revenue"] == 115900
        assert result.meta["total_items"] == 62
        assert result.lines[0] == "Total revenue today: ₩115,900 (62 items sold)"
        assert [row["quantity"] for row in result.data] == [15, 12, 10, 8, 7, 5, 3, 2]

    def test_orphans_excluded_from_totals(self):
        result = make_engine([Snack("A", 100, 50, 40)], {"A": 2, "Ghost": 10}).sales_report()
        assert result.meta["total_revenue"] == 200
        assert result.meta["total_items"] == 2
        assert result.lines[-1] == "Warning: product 'Ghost' was not found in the catalog"
        assert [row["name"] for row in result.data] == ["A"]

    def test_detail_line(self):
        result = make_engine([Snack("A", 1500, 50, 40)], {"A": 2}).sales_report()
        assert "₩3,000" in result.lines[2]
        assert "( 2 x ₩1,500)" in result.lines[2]

    def test_empty_ledger(self):
        result = make_engine([Snack("A", 100, 50, 40)]).sales_report()
        assert result.lines[0] == "Total revenue today: ₩0 (0 items sold)"
        assert "No sales recorded." in result.lines


class TestManagementAnalysisReport:
    def test_demo_store_rankings(self, engine):
        result = engine.management_analysis_report()
        meta = result.meta
        # cola and strawberry sandwich both turn over 6.0; cola comes first in the catalog
        assert meta["max_turnover"]["name"] == "콜라 500ml"
        assert meta["max_turnover"]["turnover_rate"] == 6.0
        assert meta["min_turnover"]["name"] == "물 500ml"
        assert meta["max_efficiency"]["name"] == "새우깡"
        assert meta["overstocked"] == [{"name": "즉석라면", "safety_stock": 45}]
        assert meta["reorder_count"] == 3
        assert meta["reorder_units"] == 50
        assert "- Best efficiency  : 새우깡 (300%)" in result.lines
        assert "- Overstocked      : 즉석라면(45)" in result.lines
        assert "- Reorder advised  : 3 products, 50 units" in result.lines

    def test_unsold_products_do_not_participate(self, engine):
        names = [row["name"] for row in engine.management_analysis_report().data]
        assert "즉석라면" not in names
        assert len(names) == 8

    def test_zero_turnover_excluded_from_minimum(self):
        products = [Snack("Idle", 100, 50, 10), Snack("Busy", 100, 50, 10)]
        result = make_engine(products, {"Idle": 0, "Busy": 4}).management_analysis_report()
        assert result.meta["min_turnover"]["name"] == "Busy"

    def test_minimum_omitted_without_moving_products(self):
        result = make_engine([Snack("Idle", 100, 50, 10)], {"Idle": 0}).management_analysis_report()
        assert result.meta["min_turnover"] is None
        assert not any(line.startswith("- Lowest turnover") for line in result.lines)
        assert any(line.startswith("- Highest turnover") for line in result.lines)

    def test_empty_ledger_skips_rankings(self):
        result = make_engine([Snack("Full", 100, 50, 40)]).management_analysis_report()
        assert result.meta["max_turnover"] is None
        assert result.lines[0] == "[Stock status]"
        assert "- Overstocked      : Full(40)" in result.lines

    def test_no_overstock(self):
        result = make_engine([Snack("Half", 100, 50, 25)]).management_analysis_report()
        assert "- Overstocked      : none" in result.lines

    def test_infinite_turnover_renders(self):
        result = make_engine([Snack("Gone", 100, 50, 2)], {"Gone": 4}).management_analysis_report()
        assert "- Highest turnover : Gone (inf)" in result.lines


class TestOverallStatusReport:
    def test_demo_store_summary(self, engine):
        meta = engine.overall_status_report().meta
        assert meta["product_count"] == 9
        assert meta["projected_units"] == 63
        assert meta["inventory_value"] == 87700
        assert meta["low_stock_count"] == 6
        assert meta["near_expiry_count"] == 3
        assert meta["units_sold"] == 62

    def test_projected_total_excludes_orphans(self):
        products = [Snack("A", 100, 50, 10), Snack("B", 100, 50, 20)]
        meta = make_engine(products, {"A": 4, "Ghost": 7}).overall_status_report().meta
        assert meta["projected_units"] == 30 - 4
        assert meta["units_sold"] == 11

    def test_oversold_value_is_negative(self):
        meta = make_engine([Snack("A", 100, 50, 1)], {"A": 3}).overall_status_report().meta
        assert meta["projected_units"] == -2
        assert meta["inventory_value"] == -200

    def test_lines(self, engine):
        lines = engine.overall_status_report().lines
        assert lines[0] == "- Registered products : 9"
        assert lines[2] == "- Inventory value     : ₩87,700"
