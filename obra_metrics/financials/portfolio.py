"""Aggregation of unit ROI into project and cross-project summaries."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from obra_metrics.financials.allocation import resolve_cost_basis
from obra_metrics.financials.roi import (
    DEFAULT_DAYS_PER_MONTH,
    Number,
    compute_metrics,
    first_expense_date,
    holding_months,
    is_realized_sale,
)
from obra_metrics.models.base import ZERO, to_decimal
from obra_metrics.models.enums import UnitStatus
from obra_metrics.models.metrics import PortfolioSummary
from obra_metrics.models.project import Project, Unit


@dataclass
class _Accumulator:
    """Running sums shared by project and portfolio aggregation."""

    total_roi: Decimal = ZERO
    total_monthly_roi: Decimal = ZERO
    total_real_monthly_roi: Decimal = ZERO
    qualifying: int = 0
    sold: int = 0
    available: int = 0
    realized_revenue: Decimal = ZERO
    potential_revenue: Decimal = ZERO

    def add_units(
        self,
        units: Iterable[Unit],
        project: Project,
        inflation_rate: Decimal,
        days_per_month: Number,
    ) -> None:
        start = first_expense_date(project.expenses)

        for unit in units:
            if unit.status == UnitStatus.AVAILABLE:
                self.available += 1
                self.potential_revenue += to_decimal(unit.estimated_sale_value)
                continue

            self.sold += 1
            self.realized_revenue += to_decimal(unit.sale_value)

            if not is_realized_sale(unit):
                continue

            cost_basis = resolve_cost_basis(unit, project)
            if cost_basis <= 0:
                continue

            sale_value = to_decimal(unit.sale_value)
            months = holding_months(start, unit.sale_date, days_per_month)
            metrics = compute_metrics(sale_value - cost_basis, cost_basis, months, inflation_rate)

            self.total_roi += metrics.nominal_total_roi
            self.total_monthly_roi += metrics.nominal_monthly_roi
            self.total_real_monthly_roi += metrics.real_monthly_roi
            self.qualifying += 1

    def summary(self) -> PortfolioSummary:
        count = Decimal(self.qualifying)
        if self.qualifying > 0:
            avg_roi = self.total_roi / count
            avg_monthly = self.total_monthly_roi / count
            avg_real = self.total_real_monthly_roi / count
        else:
            avg_roi = avg_monthly = avg_real = ZERO

        return PortfolioSummary(
            avg_roi=avg_roi,
            avg_monthly_roi=avg_monthly,
            avg_real_monthly_roi=avg_real,
            sold_count=self.sold,
            available_count=self.available,
            qualifying_count=self.qualifying,
            realized_revenue=self.realized_revenue,
            potential_revenue=self.potential_revenue,
        )


def aggregate(
    units: Iterable[Unit],
    project: Project,
    inflation_rate: Number = ZERO,
    days_per_month: Number = DEFAULT_DAYS_PER_MONTH,
) -> PortfolioSummary:
    """Summarize sales and average ROI for a set of units of one project.

    Parameters
    ----------
    units : Iterable[Unit]
        Units to summarize, usually ``project.units``. Cost bases are
        always resolved against the whole project.
    project : Project
        Project supplying progress, total area and expenses.
    inflation_rate : Decimal | float | int
        Monthly inflation as a fraction.
    days_per_month : Decimal | float | int
        Month-length convention for holding periods.

    Returns
    -------
    PortfolioSummary
        Averages are simple means over sold units with a positive sale
        value and cost basis. Realized revenue counts Sold units and
        potential revenue counts Available units only.
    """
    acc = _Accumulator()
    acc.add_units(units, project, to_decimal(inflation_rate), days_per_month)
    return acc.summary()


def aggregate_portfolio(
    projects: Iterable[Project],
    inflation_rate: Number = ZERO,
    days_per_month: Number = DEFAULT_DAYS_PER_MONTH,
) -> PortfolioSummary:
    """Summarize every unit across projects.

    Each qualifying sale weighs the same regardless of the project it
    belongs to.
    """
    acc = _Accumulator()
    rate = to_decimal(inflation_rate)
    for project in projects:
        acc.add_units(project.units, project, rate, days_per_month)
    return acc.summary()
