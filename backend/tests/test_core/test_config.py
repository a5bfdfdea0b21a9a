"""
Unit tests for settings and logging setup

Author: TM3
Date: 2026-10-19
"""
import logging
from decimal import Decimal
from unittest.mock import patch

from retail_pos.core import config
from retail_pos.core.config import Settings
from retail_pos.core.logging_config import configure_logging


class TestSettings:
    """Settings defaults and parsing"""

    def test_business_constants(self):
        assert config.TAX_RATE == Decimal("0.10")
        assert config.LOW_STOCK_THRESHOLD == 20
        assert config.DEFAULT_SHOP_PASSWORD == "shop123"
        assert config.ADMIN_SHOP_ID == 0
        assert config.ORDER_NUMBER_FORMAT.format(year=2026, id=7) == "ORD-2026-0007"

    def test_defaults(self):
        settings = Settings()

        assert settings.DATA_SOURCE == "local"
        assert settings.AUTH_SOURCE == "local"
        assert settings.DECREMENT_STOCK_ON_COMPLETION is True
        assert (settings.SEED_DIR / "products.json").exists()

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATA_SOURCE", "remote")
        monkeypatch.setenv("DECREMENT_STOCK_ON_COMPLETION", "false")

        settings = Settings()

        assert settings.DATA_SOURCE == "remote"
        assert settings.DECREMENT_STOCK_ON_COMPLETION is False

    def test_allowed_origins_comma_separated(self):
        settings = Settings(ALLOWED_ORIGINS="http://a.test, http://b.test")
        assert settings.get_allowed_origins() == ["http://a.test", "http://b.test"]

    def test_allowed_origins_json_list(self):
        settings = Settings(ALLOWED_ORIGINS='["http://a.test"]')
        assert settings.get_allowed_origins() == ["http://a.test"]


class TestLoggingConfig:
    """Logging setup"""

    @patch('retail_pos.core.logging_config.logging.basicConfig')
    def test_configure_logging_uses_level(self, mock_basic_config):
        configure_logging("debug")

        mock_basic_config.assert_called_once()
        assert mock_basic_config.call_args.kwargs["level"] == "DEBUG"
        assert logging.getLogger("httpx").level == logging.WARNING
