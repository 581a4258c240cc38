from datetime import date

import pytest

from models.policy import DiscountPolicy, ReportContext
from services.analytics.engine import InventoryAnalyticsEngine
from services.sample_data import demo_products, demo_sales

TODAY = date(2024, 5, 1)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def report_context():
    return ReportContext(
        stock_low_threshold=0.3,
        expiry_warning_days=3,
        discount_policy=DiscountPolicy.from_mapping({3: 0.0, 2: 0.3, 1: 0.5, 0: 0.7}),
    )


@pytest.fixture
def store_products(today):
    """The nine-product demo catalog with expiry dates relative to ``today``."""
    return demo_products(today)


@pytest.fixture
def store_sales():
    return demo_sales()


@pytest.fixture
def engine(store_products, store_sales, report_context, today):
    return InventoryAnalyticsEngine(store_products, store_sales, report_context, today=today)


@pytest.fixture(autouse=True)
def isolate_config(tmp_path):
    """Isolate configuration for each test to prevent global state pollution."""
    from config import Config

    config_file = tmp_path / "test_app_config.json"
    Config._reset_for_testing(config_file)
    Config.reset_to_defaults()

    yield config_file

    Config._reset_for_testing(None)
