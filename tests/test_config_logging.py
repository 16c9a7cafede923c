"""Tests for config and logging."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from obra_metrics.config import (
    IPCA_SERIES_URL,
    InflationConfig,
    MetricsConfig,
    ObraConfig,
    OutputConfig,
)
from obra_metrics.exceptions import ConfigurationError
from obra_metrics.logging import JsonFormatter, get_logger, setup_logging

ENV_VARS = [
    "DAYS_PER_MONTH",
    "INFLATION_RATE",
    "INFLATION_SERIES_URL",
    "INFLATION_MONTHS",
    "INFLATION_TIMEOUT",
    "OUTPUT_DIR",
    "PRETTY_JSON",
    "SEED",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env():
    """Environment without any obra-metrics variables."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestMetricsConfig:
    """Tests for MetricsConfig."""

    def test_default_values(self) -> None:
        """Test default calculation conventions."""
        config = MetricsConfig()

        assert config.days_per_month == Decimal("30.4")
        assert config.default_inflation_rate == 0


class TestInflationConfig:
    """Tests for InflationConfig."""

    def test_default_values(self) -> None:
        """Test default series settings."""
        config = InflationConfig()

        assert config.series_url == IPCA_SERIES_URL
        assert config.months == 12
        assert config.timeout_seconds == 10.0
        assert config.fallback_rate == Decimal("0.004")

    def test_url_fills_months(self) -> None:
        """Test the number of readings is placed in the URL."""
        config = InflationConfig(series_url="http://example.test/{months}", months=6)
        assert config.url == "http://example.test/6"


class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_default_values(self) -> None:
        config = OutputConfig()

        assert config.json_output_dir == Path("output")
        assert config.pretty_json is False


class TestObraConfig:
    """Tests for ObraConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = ObraConfig()

        assert isinstance(config.metrics, MetricsConfig)
        assert isinstance(config.inflation, InflationConfig)
        assert isinstance(config.output, OutputConfig)
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_default(self, clean_env) -> None:
        """Test creating config from an empty environment."""
        config = ObraConfig.from_env()

        assert config.metrics.days_per_month == Decimal("30.4")
        assert config.metrics.default_inflation_rate == 0
        assert config.inflation.series_url == IPCA_SERIES_URL
        assert config.output.json_output_dir == Path("output")
        assert config.seed is None
        assert config.log_level == "INFO"
        assert config.log_format == "standard"

    def test_from_env_custom(self, clean_env) -> None:
        """Test creating config from custom environment variables."""
        custom = {
            "DAYS_PER_MONTH": "30",
            "INFLATION_RATE": "0.0045",
            "INFLATION_SERIES_URL": "http://example.test/{months}",
            "INFLATION_MONTHS": "24",
            "INFLATION_TIMEOUT": "2.5",
            "OUTPUT_DIR": "/data/output",
            "PRETTY_JSON": "true",
            "SEED": "12345",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
        }
        with patch.dict(os.environ, custom):
            config = ObraConfig.from_env()

        assert config.metrics.days_per_month == Decimal("30")
        assert config.metrics.default_inflation_rate == Decimal("0.0045")
        assert config.inflation.url == "http://example.test/24"
        assert config.inflation.timeout_seconds == 2.5
        assert config.output.json_output_dir == Path("/data/output")
        assert config.output.pretty_json is True
        assert config.seed == 12345
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    @pytest.mark.parametrize(
        "name,value",
        [("DAYS_PER_MONTH", "thirty"), ("INFLATION_MONTHS", "1.5"), ("SEED", "abc")],
    )
    def test_from_env_invalid(self, clean_env, name: str, value: str) -> None:
        """Test invalid numbers raise ConfigurationError."""
        with patch.dict(os.environ, {name: value}):
            with pytest.raises(ConfigurationError, match=name):
                ObraConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        """Test default logging setup."""
        setup_logging()

        assert logging.getLogger("obra_metrics").level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        """Test debug level logging setup."""
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        """Test JSON format logging."""
        setup_logging(format_type="json")

        handlers = logging.getLogger().handlers
        assert any(isinstance(h.formatter, JsonFormatter) for h in handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        """Test that setup_logging replaces existing handlers."""
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(root.handlers) == 1

    def test_quiets_library_loggers(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("faker").level == logging.WARNING

    def test_library_loggers_follow_stricter_level(self) -> None:
        setup_logging(level="ERROR")

        assert logging.getLogger("requests").level == logging.ERROR

    def test_logs_to_stderr(self) -> None:
        """Test records do not mix with console sink output on stdout."""
        setup_logging()

        (handler,) = logging.getLogger().handlers
        assert handler.stream is sys.stderr

    def test_unknown_format(self) -> None:
        """Test an unknown format type is rejected."""
        with pytest.raises(ConfigurationError, match="xml"):
            setup_logging(format_type="xml")


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_format(self) -> None:
        """Test a record is rendered as a JSON object."""
        record = logging.LogRecord("obra_metrics.test", logging.INFO, __file__, 1, "ROI %s", ("0.2",), None)

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "obra_metrics.test"
        assert data["message"] == "ROI 0.2"
        assert data["timestamp"] == datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()

    def test_format_with_exception(self) -> None:
        """Test exception info is included."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        data = json.loads(JsonFormatter().format(record))
        assert "ValueError: boom" in data["exception"]

    def test_format_with_extra(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", (), None)
        record.extra = {"project_id": "proj-001"}

        data = json.loads(JsonFormatter().format(record))
        assert data["project_id"] == "proj-001"


class TestGetLogger:
    """Tests for get_logger."""

    def test_get_logger(self) -> None:
        assert get_logger("obra_metrics.test").name == "obra_metrics.test"
