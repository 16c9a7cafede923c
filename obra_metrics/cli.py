"""Command line entry point: generate a sample portfolio and report its metrics."""

import argparse
import logging
from datetime import date
from decimal import Decimal, InvalidOperation

from obra_metrics.config import ObraConfig
from obra_metrics.financials.portfolio import aggregate, aggregate_portfolio
from obra_metrics.financials.summary import project_summary
from obra_metrics.inflation import resolve_inflation_rate
from obra_metrics.logging import setup_logging
from obra_metrics.scenarios.portfolio import DevelopmentPortfolioScenario
from obra_metrics.sinks.console import ConsoleSink
from obra_metrics.sinks.json_file import JsonFileSink

logger = logging.getLogger(__name__)


def _decimal_arg(value: str) -> Decimal:
    try:
        rate = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid decimal value: {value!r}") from None
    if not rate.is_finite():
        raise argparse.ArgumentTypeError(f"invalid decimal value: {value!r}")
    return rate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a sample construction portfolio and compute its financial metrics"
    )
    parser.add_argument(
        "--projects",
        type=int,
        default=5,
        help="Number of projects to generate (default: 5)",
    )
    parser.add_argument(
        "--units",
        type=int,
        default=8,
        help="Units per project (default: 8)",
    )
    parser.add_argument(
        "--completed-rate",
        type=float,
        default=0.4,
        help="Share of projects at 100%% (default: 0.4)",
    )
    parser.add_argument(
        "--sold-rate",
        type=float,
        default=0.5,
        help="Share of units sold (default: 0.5)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED env or none)",
    )
    parser.add_argument(
        "--inflation",
        type=_decimal_arg,
        default=None,
        help="Monthly inflation as a fraction, e.g. 0.004 (default: INFLATION_RATE env)",
    )
    parser.add_argument(
        "--fetch-inflation",
        action="store_true",
        help="Fetch the monthly rate from the IPCA series instead",
    )
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Reference date in ISO format (default: today)",
    )
    parser.add_argument(
        "--format",
        choices=["console", "json"],
        default="console",
        help="Output format (default: console)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory for --format json (default: OUTPUT_DIR env)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL env or INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default=None,
        help="Log format (default: LOG_FORMAT env or standard)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = ObraConfig.from_env()
    setup_logging(args.log_level or config.log_level, args.log_format or config.log_format)

    as_of = args.as_of or date.today()
    seed = args.seed if args.seed is not None else config.seed

    if args.fetch_inflation:
        inflation = resolve_inflation_rate(config.inflation)
    elif args.inflation is not None:
        inflation = args.inflation
    else:
        inflation = config.metrics.default_inflation_rate

    store = DevelopmentPortfolioScenario(
        num_projects=args.projects,
        units_per_project=args.units,
        completed_rate=args.completed_rate,
        sold_rate=args.sold_rate,
        seed=seed,
        today=as_of,
    ).generate()

    days_per_month = config.metrics.days_per_month
    projects = list(store.projects.values())
    metrics = []
    for project in projects:
        record = {
            "project_id": project.project_id,
            "name": project.name,
            "progress": project.progress,
            "portfolio": aggregate(project.units, project, inflation, days_per_month),
            "summary": project_summary(project, as_of, days_per_month),
        }
        metrics.append(record)

    overall = aggregate_portfolio(projects, inflation, days_per_month)
    logger.info(
        "Portfolio: %d sold, %d available, average ROI %.2f%%",
        overall.sold_count,
        overall.available_count,
        overall.avg_roi * 100,
    )

    if args.format == "json":
        sink: JsonFileSink | ConsoleSink = JsonFileSink(
            args.output or config.output.json_output_dir,
            pretty=config.output.pretty_json,
        )
    else:
        sink = ConsoleSink(pretty=True, max_records=None)

    sink.write_batch("projects", projects)
    sink.write_batch("project_metrics", metrics)
    sink.write_batch("portfolio", [overall])
    sink.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
