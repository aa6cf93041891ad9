"""
单元测试: Settings & 日志配置

运行: pytest tests/test_config.py -v
"""
import logging

import pytest

from config import Settings
from core.logging_config import setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BINANCE_API_KEY", "BINANCE_API_SECRET", "BINANCE_TESTNET",
                 "BINANCE_BASE_URL", "BINANCE_TIMEOUT_MS"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """配置解析"""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.binance_config() == {
            "api_key": None,
            "api_secret": None,
            "base_url": "https://api.binance.com/",
            "timeout": None,
        }

    def test_empty_timeout_is_none(self, monkeypatch):
        monkeypatch.setenv("BINANCE_TIMEOUT_MS", "")
        assert Settings(_env_file=None).BINANCE_TIMEOUT_MS is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BINANCE_API_KEY", "a" * 64)
        monkeypatch.setenv("BINANCE_API_SECRET", "b" * 64)
        monkeypatch.setenv("BINANCE_TIMEOUT_MS", "5000")
        config = Settings(_env_file=None).binance_config()
        assert config["api_key"] == "a" * 64
        assert config["api_secret"] == "b" * 64
        assert config["timeout"] == 5000

    def test_testnet_overrides_base_url(self, monkeypatch):
        monkeypatch.setenv("BINANCE_TESTNET", "true")
        assert Settings(_env_file=None).binance_config()["base_url"] == "https://testnet.binance.vision/"

    def test_connector_from_settings(self, monkeypatch):
        from connectors.binance.client import BinanceConnector

        monkeypatch.setenv("BINANCE_API_KEY", "a" * 64)
        connector = BinanceConnector.from_settings(Settings(_env_file=None))
        assert connector.credentials.api_key == "a" * 64
        assert connector.credentials.api_secret is None


class TestLogging:
    """日志配置"""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_console_only(self):
        logger = setup_logging("debug")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "binance.log"
        logger = setup_logging("INFO", str(log_file))
        assert len(logger.handlers) == 2

        logging.getLogger("connectors.binance").info("下单成功")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "| INFO     | connectors.binance | 下单成功" in content

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging("verbose").level == logging.INFO
