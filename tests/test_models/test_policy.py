import pytest

from config import Config
from models.policy import DiscountPolicy, ReportContext
from utils.exceptions import ValidationException


class TestDiscountPolicy:
    def test_rate_lookup_by_exact_day(self):
        policy = DiscountPolicy.from_mapping({3: 0.0, 2: 0.3, 1: 0.5, 0: 0.7})
        assert policy.rate_for(0) == 0.7
        assert policy.rate_for(2) == 0.3

    def test_missing_tier_means_no_discount(self):
        policy = DiscountPolicy.from_mapping({1: 0.5})
        assert policy.rate_for(5) == 0.0
        assert policy.rate_for(-1) == 0.0

    def test_string_keys_are_coerced(self):
        policy = DiscountPolicy.from_mapping({"2": 0.3, "0": 0.7})
        assert policy.rate_for(2) == 0.3
        assert policy.to_dict() == {"2": 0.3, "0": 0.7}

    @pytest.mark.parametrize("rate", [1.0, -0.1, "half"])
    def test_invalid_rate(self, rate):
        with pytest.raises(ValidationException):
            DiscountPolicy.from_mapping({1: rate})

    def test_invalid_key(self):
        with pytest.raises(ValidationException):
            DiscountPolicy.from_mapping({"soon": 0.5})

    def test_duplicate_tier_after_coercion(self):
        with pytest.raises(ValidationException):
            DiscountPolicy.from_mapping({1: 0.5, "1": 0.4})


class TestReportContext:
    def test_defaults(self):
        context = ReportContext(stock_low_threshold=0.3, expiry_warning_days=3)
        assert context.bestseller_limit == 5
        assert context.discount_policy.rate_for(0) == 0.0

    @pytest.mark.parametrize("threshold", [0, 1, 1.5, -0.2])
    def test_threshold_must_be_open_fraction(self, threshold):
        with pytest.raises(ValidationException):
            ReportContext(stock_low_threshold=threshold, expiry_warning_days=3)

    def test_negative_warning_days(self):
        with pytest.raises(ValidationException):
            ReportContext(stock_low_threshold=0.3, expiry_warning_days=-1)

    def test_mapping_policy_is_converted(self):
        context = ReportContext(0.3, 3, {0: 0.7})
        assert isinstance(context.discount_policy, DiscountPolicy)

    def test_from_config_uses_defaults(self):
        context = ReportContext.from_config()
        assert context.stock_low_threshold == 0.3
        assert context.expiry_warning_days == 3
        assert context.discount_policy.rate_for(1) == 0.5
        assert context.currency_symbol == "₩"

    def test_from_config_with_overrides(self):
        Config.set("expiry_warning_days", 5)
        context = ReportContext.from_config({"bestseller_limit": 3})
        assert context.expiry_warning_days == 5
        assert context.bestseller_limit == 3
