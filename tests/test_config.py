"""
Tests for ledger configuration
"""

import pytest
from pydantic import ValidationError

from token_ledger import config as config_module
from token_ledger.config import LedgerConfig, get_config, reload_config


class TestLedgerConfig:
    """Test environment-driven settings"""

    def test_defaults(self, monkeypatch):
        for var in ["TOKEN_LEDGER_BALANCE_BITS", "TOKEN_LEDGER_LOG_LEVEL",
                    "TOKEN_LEDGER_LOG_FORMAT", "TOKEN_LEDGER_LOG_FILE"]:
            monkeypatch.delenv(var, raising=False)

        settings = LedgerConfig(_env_file=None)

        assert settings.balance_bits == 64
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.log_file is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("TOKEN_LEDGER_BALANCE_BITS", "128")
        monkeypatch.setenv("token_ledger_log_level", "DEBUG")

        settings = LedgerConfig(_env_file=None)

        assert settings.balance_bits == 128
        assert settings.log_level == "DEBUG"

    def test_invalid_balance_bits(self, monkeypatch):
        monkeypatch.setenv("TOKEN_LEDGER_BALANCE_BITS", "4")

        with pytest.raises(ValidationError):
            LedgerConfig(_env_file=None)

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            LedgerConfig(_env_file=None, log_format="xml")

    def test_reload_config(self, monkeypatch):
        original = get_config()
        monkeypatch.setattr(config_module, "config", original)
        monkeypatch.setenv("TOKEN_LEDGER_BALANCE_BITS", "16")

        reloaded = reload_config()

        assert reloaded.balance_bits == 16
        assert get_config() is reloaded

    def test_log_level_normalized(self, monkeypatch):
        """Test lower-case level names are accepted"""
        monkeypatch.setenv("TOKEN_LEDGER_LOG_LEVEL", "debug")

        settings = LedgerConfig(_env_file=None)

        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        """Test unknown level names are rejected at load time"""
        monkeypatch.setenv("TOKEN_LEDGER_LOG_LEVEL", "verbose")

        with pytest.raises(ValidationError):
            LedgerConfig(_env_file=None)
