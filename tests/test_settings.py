"""
Configuration tests
"""

import importlib

import pytest

import config.settings
from config.settings import missing_settings, parse_origins


class TestRequiredSettings:

    def test_all_present(self):
        env = {"DATABASE_URL": "postgresql://db.example.com/postgres", "DATABASE_PASSWORD": "secret"}
        assert missing_settings(env) == []

    def test_missing_and_blank_values_are_reported(self):
        assert missing_settings({"DATABASE_URL": "  "}) == ["DATABASE_URL", "DATABASE_PASSWORD"]

    def test_import_fails_without_database_password(self, monkeypatch):
        monkeypatch.delenv("DATABASE_PASSWORD")
        try:
            with pytest.raises(ValueError, match="DATABASE_PASSWORD"):
                importlib.reload(config.settings)
        finally:
            monkeypatch.undo()
            importlib.reload(config.settings)

        assert config.settings.DATABASE_PASSWORD


def test_parse_origins():
    assert parse_origins("http://localhost:5500, https://padaria.example.com,") == [
        "http://localhost:5500",
        "https://padaria.example.com",
    ]
