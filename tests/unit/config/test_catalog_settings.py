"""Unit tests for Settings loading from the environment."""

import pytest
from pydantic import ValidationError

from stamp_catalog.config import Settings, get_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "LOG_LEVEL",
        "STAMP_CATALOG_LOG_LEVEL",
        "STAMP_CATALOG_INPUT_ENCODING",
        "STAMP_CATALOG_ERRORS_CSV_PATH",
        "STAMP_CATALOG_LOG_TO_FILE",
        "STAMP_CATALOG_CLEANSING_RULES_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.LOG_LEVEL == "WARNING"
        assert settings.input_encoding == "utf-8"
        assert settings.errors_csv_path is None
        assert settings.log_to_file is False

    def test_log_level_is_upper_cased(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "debug")
        assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"

    def test_prefixed_log_level_alias(self, clean_env):
        clean_env.setenv("STAMP_CATALOG_LOG_LEVEL", "error")
        assert Settings(_env_file=None).LOG_LEVEL == "ERROR"

    def test_invalid_log_level(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError, match="LOG_LEVEL must be one of"):
            Settings(_env_file=None)

    def test_prefixed_fields(self, clean_env):
        clean_env.setenv("STAMP_CATALOG_INPUT_ENCODING", "latin-1")
        clean_env.setenv("STAMP_CATALOG_ERRORS_CSV_PATH", "logs/rejected.csv")

        settings = Settings(_env_file=None)

        assert settings.input_encoding == "latin-1"
        assert settings.errors_csv_path == "logs/rejected.csv"

    def test_get_settings_is_cached(self, clean_env):
        assert get_settings() is get_settings()

    def test_log_file_dir_created(self, clean_env, tmp_path):
        clean_env.setenv("STAMP_CATALOG_LOG_FILE_DIR", str(tmp_path / "logs"))
        log_dir = Settings(_env_file=None).get_log_file_dir()
        assert log_dir.is_dir()
