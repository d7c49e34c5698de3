# backend/app/tests/unit/test_config.py

import logging

import pytest

from backend.app import config
from backend.app.config import (
    DevelopmentSettings,
    ProductionSettings,
    Settings,
    get_settings,
    setup_logging,
    validate_settings,
)
from backend.app.logging_config import LOGGING_CONFIG, UploadNameFilter


class TestGetSettings:
    @pytest.mark.parametrize(
        "environment, expected",
        [
            ("production", ProductionSettings),
            ("testing", config.TestingSettings),
            ("test", config.TestingSettings),
            ("development", DevelopmentSettings),
            ("staging", DevelopmentSettings),
        ],
    )
    def test_environment_selects_settings_class(self, monkeypatch, environment, expected):
        monkeypatch.setenv("ENVIRONMENT", environment)

        assert type(get_settings()) is expected

    def test_is_cached(self):
        assert get_settings() is get_settings()

    def test_cors_origins_comma_separated(self):
        settings = Settings(CORS_ORIGINS="http://a.test, http://b.test,")

        assert settings.CORS_ORIGINS == ["http://a.test", "http://b.test"]

    def test_cors_origins_from_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")

        assert Settings().CORS_ORIGINS == ["http://a.test", "http://b.test"]
        assert get_settings().CORS_ORIGINS == ["http://a.test", "http://b.test"]

    def test_production_flag(self):
        assert Settings(ENVIRONMENT="Production").is_production
        assert not Settings(ENVIRONMENT="testing").is_production


class TestValidateSettings:
    def test_defaults_are_valid(self):
        assert validate_settings(Settings()) == []

    def test_reports_issues(self):
        settings = Settings(
            MAX_UPLOAD_SIZE=10, LOG_LEVEL="LOUD", CSV_FALLBACK_ENCODING="no-such-codec"
        )

        issues = validate_settings(settings)

        assert len(issues) == 3
        assert any("MAX_UPLOAD_SIZE" in issue for issue in issues)
        assert any("LOG_LEVEL" in issue for issue in issues)
        assert any("CSV_FALLBACK_ENCODING" in issue for issue in issues)

    def test_wildcard_cors_in_production(self):
        settings = ProductionSettings(ENVIRONMENT="production", CORS_ORIGINS=["*"])

        assert validate_settings(settings) == [
            "CORS_ORIGINS must not contain '*' in production"
        ]


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_console_only(self):
        setup_logging(Settings(LOG_LEVEL="WARNING"))

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_with_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "csv.log"

        setup_logging(Settings(LOG_LEVEL="DEBUG", LOG_FILE=str(log_file)))
        logging.getLogger("backend.test").debug("hello")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert log_file.parent.is_dir()


class TestUvicornLoggingConfig:
    def test_upload_name_defaults(self):
        record = logging.LogRecord("backend", logging.INFO, __file__, 1, "hi", None, None)

        assert UploadNameFilter().filter(record) is True
        assert record.upload_name == "-"

    def test_upload_name_is_kept(self):
        record = logging.LogRecord("backend", logging.INFO, __file__, 1, "hi", None, None)
        record.upload_name = "marks.csv"

        UploadNameFilter().filter(record)

        assert record.upload_name == "marks.csv"

    def test_default_handler_uses_filter(self):
        assert LOGGING_CONFIG["handlers"]["default"]["filters"] == ["upload_name_filter"]
        assert LOGGING_CONFIG["filters"]["upload_name_filter"]["()"] is UploadNameFilter
