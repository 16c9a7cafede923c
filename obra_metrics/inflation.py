"""Monthly inflation rate from the central bank IPCA series.

The series endpoint returns a JSON list of readings such as
``[{"data": "01/01/2025", "valor": "0.16"}, ...]`` where ``valor`` is the
monthly variation in percent. The rate used by the ROI calculations is the
mean of the last readings, as a fraction (0.5 becomes 0.005).
"""

import logging
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import Any

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from obra_metrics.config import InflationConfig
from obra_metrics.exceptions import InflationSourceError
from obra_metrics.models.base import ZERO

logger = logging.getLogger(__name__)


class _TransientFetchError(InflationSourceError):
    """Network failure worth retrying."""


def average_monthly_rate(readings: Iterable[Any]) -> Decimal:
    """Mean of percentage readings, converted to a fraction.

    Parameters
    ----------
    readings : Iterable
        Percent values (numbers or numeric strings).

    Returns
    -------
    Decimal
        0 when there are no readings.

    Raises
    ------
    InflationSourceError
        If a reading is not a finite number.
    """
    values = []
    for raw in readings:
        try:
            value = Decimal(str(raw))
        except InvalidOperation as e:
            raise InflationSourceError(f"Invalid inflation reading: {raw!r}") from e
        if not value.is_finite():
            raise InflationSourceError(f"Invalid inflation reading: {raw!r}")
        values.append(value)

    if not values:
        return ZERO
    return sum(values, ZERO) / Decimal(len(values)) / Decimal("100")


@retry(
    reraise=True,
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=1, max=4),
    retry=retry_if_exception_type(_TransientFetchError),
)
def _get_series(url: str, timeout: float) -> list[dict[str, Any]]:
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise _TransientFetchError(str(e)) from e

    if resp.status_code >= 500:
        raise _TransientFetchError(f"HTTP {resp.status_code}")
    if resp.status_code >= 400:
        raise InflationSourceError(f"HTTP {resp.status_code}")

    try:
        data = resp.json()
    except ValueError as e:
        raise InflationSourceError("Inflation series is not valid JSON") from e

    if not isinstance(data, list):
        raise InflationSourceError("Inflation series must be a JSON list")
    return data


def fetch_monthly_inflation(config: InflationConfig | None = None) -> Decimal:
    """Fetch the IPCA series and return the average monthly rate.

    Raises
    ------
    InflationSourceError
        If the series cannot be fetched, parsed, or is empty.
    """
    config = config or InflationConfig()
    data = _get_series(config.url, config.timeout_seconds)

    try:
        readings = [item["valor"] for item in data]
    except (KeyError, TypeError) as e:
        raise InflationSourceError("Inflation reading without 'valor'") from e

    if not readings:
        raise InflationSourceError("Inflation series is empty")

    rate = average_monthly_rate(readings)
    logger.info("Monthly inflation: %s over %d readings", rate, len(readings))
    return rate


def resolve_inflation_rate(config: InflationConfig | None = None) -> Decimal:
    """Fetch the monthly rate, falling back to the configured estimate."""
    config = config or InflationConfig()
    try:
        return fetch_monthly_inflation(config)
    except InflationSourceError as e:
        logger.warning(
            "Could not fetch inflation (%s), using fallback rate %s",
            e,
            config.fallback_rate,
        )
        return config.fallback_rate
