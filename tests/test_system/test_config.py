import json
import logging

import pytest

from config import (
    Config,
    ConfigLoadError,
    ConfigValidationError,
    resolve_debug_level,
)


class TestConfig:
    @pytest.fixture
    def temp_config_file(self, tmp_path):
        """Create a temporary config file for testing."""
        config_file = tmp_path / "app_config.json"
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(
                {
                    "version": "1.0",
                    "stock_low_threshold": 0.25,
                    "expiry_warning_days": 5,
                    "discount_policy": {"1": 0.5, "0": 0.8},
                },
                f,
            )
        return config_file

    @pytest.fixture
    def config(self, temp_config_file):
        """Create a Config instance with the temporary config file."""
        Config._reset_for_testing(temp_config_file)
        Config._load_config()
        return Config()

    def test_singleton_pattern(self, config):
        assert Config() is config

    def test_load_config_merges_defaults(self, config):
        assert config.get("stock_low_threshold") == 0.25
        assert config.get("expiry_warning_days") == 5
        assert config.get("discount_policy") == {"1": 0.5, "0": 0.8}
        # absent from the file, filled from defaults
        assert config.get("bestseller_limit") == 5
        assert config.get("currency_symbol") == "₩"

    def test_get_default_value(self, config):
        assert config.get("nonexistent", default="fallback") == "fallback"

    def test_set_persists(self, config, temp_config_file):
        config.set("bestseller_limit", 3)
        assert config.get("bestseller_limit") == 3
        with open(temp_config_file, encoding="utf-8") as f:
            assert json.load(f)["bestseller_limit"] == 3

    @pytest.mark.parametrize(
        "key, value",
        [
            ("stock_low_threshold", 1.5),
            ("stock_low_threshold", "0.3"),
            ("expiry_warning_days", -1),
            ("expiry_warning_days", True),
            ("bestseller_limit", 0),
            ("log_format", "xml"),
            ("discount_policy", {"soon": 0.5}),
            ("discount_policy", {"1": 1.0}),
        ],
    )
    def test_set_rejects_invalid_values(self, config, key, value):
        before = config.get(key)
        with pytest.raises(ConfigValidationError):
            config.set(key, value)
        assert config.get(key) == before

    def test_invalid_config_file(self, tmp_path):
        invalid_file = tmp_path / "invalid_config.json"
        invalid_file.write_text("invalid json", encoding="utf-8")
        Config._reset_for_testing(invalid_file)
        with pytest.raises(ConfigLoadError):
            Config.get("stock_low_threshold")

    def test_invalid_values_in_file(self, tmp_path):
        bad_file = tmp_path / "bad_config.json"
        bad_file.write_text(json.dumps({"version": "1.0", "stock_low_threshold": 0}), encoding="utf-8")
        Config._reset_for_testing(bad_file)
        with pytest.raises(ConfigValidationError):
            Config.get("stock_low_threshold")

    def test_missing_file_is_created_with_defaults(self, tmp_path):
        config_file = tmp_path / "fresh.json"
        Config._reset_for_testing(config_file)
        assert Config.get("expiry_warning_days") == 3
        assert config_file.exists()

    def test_reload_picks_up_file_changes(self, config, temp_config_file):
        data = json.loads(temp_config_file.read_text(encoding="utf-8"))
        data["expiry_warning_days"] = 7
        temp_config_file.write_text(json.dumps(data), encoding="utf-8")
        assert config.get("expiry_warning_days") == 5
        config.reload()
        assert config.get("expiry_warning_days") == 7

    def test_reset_to_defaults(self, config):
        config.reset_to_defaults()
        assert config.get("stock_low_threshold") == 0.3
        assert config.get("discount_policy") == {"3": 0.0, "2": 0.3, "1": 0.5, "0": 0.7}


class TestDebugLevel:
    @pytest.mark.parametrize(
        "raw, expected",
        [("1", logging.CRITICAL), ("3", logging.WARNING), ("5", logging.DEBUG)],
    )
    def test_known_levels(self, raw, expected):
        assert resolve_debug_level(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "verbose", "9"])
    def test_fallback_to_info(self, raw):
        assert resolve_debug_level(raw) == logging.INFO
