"""Configuration management for obra-metrics."""

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path

from obra_metrics.exceptions import ConfigurationError

# IPCA monthly variation, Banco Central do Brasil SGS series 433
IPCA_SERIES_URL = "https://api.bcb.gov.br/dados/serie/bcdata.sgs.433/dados/ultimos/{months}?formato=json"


@dataclass
class MetricsConfig:
    """Conventions used by the financial calculations."""

    days_per_month: Decimal = Decimal("30.4")
    default_inflation_rate: Decimal = Decimal("0")


@dataclass
class InflationConfig:
    """Monthly inflation source configuration."""

    series_url: str = IPCA_SERIES_URL
    months: int = 12
    timeout_seconds: float = 10.0
    fallback_rate: Decimal = Decimal("0.004")  # 0.4% per month

    @property
    def url(self) -> str:
        """Series URL with the number of readings filled in."""
        return self.series_url.format(months=self.months)


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class ObraConfig:
    """Main configuration for obra-metrics."""

    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    inflation: InflationConfig = field(default_factory=InflationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"  # standard or json

    @classmethod
    def from_env(cls) -> "ObraConfig":
        """Create config from environment variables."""
        metrics = MetricsConfig(
            days_per_month=_env_decimal("DAYS_PER_MONTH", "30.4"),
            default_inflation_rate=_env_decimal("INFLATION_RATE", "0"),
        )

        inflation = InflationConfig(
            series_url=os.getenv("INFLATION_SERIES_URL", IPCA_SERIES_URL),
            months=_env_int("INFLATION_MONTHS", "12"),
            timeout_seconds=float(_env_decimal("INFLATION_TIMEOUT", "10")),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        seed = os.getenv("SEED")

        return cls(
            metrics=metrics,
            inflation=inflation,
            output=output,
            seed=_env_int("SEED", seed) if seed else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _env_decimal(name: str, default: str) -> Decimal:
    raw = os.getenv(name, default)
    try:
        return Decimal(raw)
    except InvalidOperation as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
