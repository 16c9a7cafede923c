"""Tests for the monthly inflation source."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests
from tenacity import wait_none

from obra_metrics.config import InflationConfig
from obra_metrics.exceptions import InflationSourceError
from obra_metrics.inflation import (
    _get_series,
    average_monthly_rate,
    fetch_monthly_inflation,
    resolve_inflation_rate,
)


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    """Retry immediately in tests."""
    monkeypatch.setattr(_get_series.retry, "wait", wait_none())


def _response(status: int = 200, payload=None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    return resp


class TestAverageMonthlyRate:
    """Tests for average_monthly_rate."""

    def test_mean_as_fraction(self) -> None:
        assert average_monthly_rate(["0.40", "0.60"]) == Decimal("0.005")

    def test_numbers_accepted(self) -> None:
        assert average_monthly_rate([0.5]) == Decimal("0.005")

    def test_empty(self) -> None:
        assert average_monthly_rate([]) == 0

    def test_invalid_reading(self) -> None:
        with pytest.raises(InflationSourceError):
            average_monthly_rate(["0.4", "n/d"])

    @pytest.mark.parametrize("readings", [["NaN", "0.5"], ["Infinity"], ["-Infinity", "0.2"]])
    def test_non_finite_reading(self, readings) -> None:
        with pytest.raises(InflationSourceError):
            average_monthly_rate(readings)


class TestFetchMonthlyInflation:
    """Tests for fetch_monthly_inflation."""

    def test_fetch(self) -> None:
        payload = [{"data": "01/01/2025", "valor": "0.16"}, {"data": "01/02/2025", "valor": "1.31"}]
        config = InflationConfig(months=2, timeout_seconds=3.0)

        with patch("obra_metrics.inflation.requests.get", return_value=_response(payload=payload)) as get:
            rate = fetch_monthly_inflation(config)

        assert rate == Decimal("0.00735")
        get.assert_called_once_with(config.url, timeout=3.0)
        assert "ultimos/2" in config.url

    def test_retries_server_errors(self) -> None:
        responses = [_response(503), _response(payload=[{"valor": "0.5"}])]

        with patch("obra_metrics.inflation.requests.get", side_effect=responses) as get:
            assert fetch_monthly_inflation(InflationConfig()) == Decimal("0.005")
        assert get.call_count == 2

    def test_retries_connection_errors_then_gives_up(self) -> None:
        with patch(
            "obra_metrics.inflation.requests.get",
            side_effect=requests.ConnectionError("offline"),
        ) as get:
            with pytest.raises(InflationSourceError, match="offline"):
                fetch_monthly_inflation(InflationConfig())
        assert get.call_count == 3

    def test_client_error_not_retried(self) -> None:
        with patch("obra_metrics.inflation.requests.get", return_value=_response(404)) as get:
            with pytest.raises(InflationSourceError, match="404"):
                fetch_monthly_inflation(InflationConfig())
        assert get.call_count == 1

    def test_invalid_json(self) -> None:
        resp = _response()
        resp.json.side_effect = ValueError("bad json")
        with patch("obra_metrics.inflation.requests.get", return_value=resp):
            with pytest.raises(InflationSourceError, match="JSON"):
                fetch_monthly_inflation(InflationConfig())

    @pytest.mark.parametrize(
        "payload",
        [{"valor": "0.4"}, [], [{"data": "01/01/2025"}], ["0.4"]],
    )
    def test_malformed_series(self, payload) -> None:
        with patch("obra_metrics.inflation.requests.get", return_value=_response(payload=payload)):
            with pytest.raises(InflationSourceError):
                fetch_monthly_inflation(InflationConfig())


class TestResolveInflationRate:
    """Tests for resolve_inflation_rate."""

    def test_fetched_rate(self) -> None:
        with patch(
            "obra_metrics.inflation.requests.get",
            return_value=_response(payload=[{"valor": "0.3"}]),
        ):
            assert resolve_inflation_rate(InflationConfig()) == Decimal("0.003")

    def test_fallback_on_error(self, caplog) -> None:
        config = InflationConfig(fallback_rate=Decimal("0.0045"))
        with patch("obra_metrics.inflation.requests.get", return_value=_response(400)):
            with caplog.at_level("WARNING", logger="obra_metrics.inflation"):
                assert resolve_inflation_rate(config) == Decimal("0.0045")
        assert "fallback rate 0.0045" in caplog.text

    def test_fallback_on_non_finite_reading(self) -> None:
        config = InflationConfig(fallback_rate=Decimal("0.0045"))
        with patch(
            "obra_metrics.inflation.requests.get",
            return_value=_response(payload=[{"valor": "NaN"}]),
        ):
            assert resolve_inflation_rate(config) == Decimal("0.0045")
