"""Return on investment: nominal total, nominal monthly and real monthly.

The model is deliberately linear. Monthly ROI is total ROI divided by the
holding period, and real ROI subtracts the monthly inflation rate from the
nominal monthly figure. Neither is compounded.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from obra_metrics.financials.allocation import resolve_cost_basis, uses_actual_cost
from obra_metrics.models.base import ZERO, to_decimal
from obra_metrics.models.metrics import FinancialMetrics, UnitMetrics
from obra_metrics.models.project import Expense, Project, Unit

DEFAULT_DAYS_PER_MONTH = Decimal("30.4")

Number = Decimal | float | int


def compute_metrics(
    profit: Number,
    cost_basis: Number,
    months: Number,
    monthly_inflation_rate: Number,
) -> FinancialMetrics:
    """Compute ROI figures for a single sale.

    Parameters
    ----------
    profit : Decimal | float | int
        Sale value minus cost basis.
    cost_basis : Decimal | float | int
        Denominator for ROI. Non-positive values yield ROI 0.
    months : Decimal | float | int
        Holding period. Non-positive values yield monthly ROI 0 and are
        reported as 0.
    monthly_inflation_rate : Decimal | float | int
        Monthly inflation as a fraction (0.005 for 0.5%).

    Returns
    -------
    FinancialMetrics
        Never raises for degenerate inputs.
    """
    profit = to_decimal(profit)
    cost_basis = to_decimal(cost_basis)
    months = to_decimal(months)
    inflation = to_decimal(monthly_inflation_rate)

    nominal_total = profit / cost_basis if cost_basis > 0 else ZERO
    safe_months = months if months > 0 else ZERO
    nominal_monthly = nominal_total / safe_months if safe_months > 0 else ZERO

    return FinancialMetrics(
        profit=profit,
        cost_basis=cost_basis,
        months=safe_months,
        nominal_total_roi=nominal_total,
        nominal_monthly_roi=nominal_monthly,
        real_monthly_roi=nominal_monthly - inflation,
        inflation_rate=inflation,
    )


def holding_months(
    start: date | None,
    end: date | None,
    days_per_month: Number = DEFAULT_DAYS_PER_MONTH,
) -> Decimal:
    """Months between two dates using a fixed month length.

    Returns 0 when either date is missing, when ``end`` is not after
    ``start``, or when ``days_per_month`` is not positive.
    """
    if start is None or end is None:
        return ZERO
    days_per_month = to_decimal(days_per_month)
    if days_per_month <= 0:
        return ZERO
    days = (end - start).days
    if days <= 0:
        return ZERO
    return Decimal(days) / days_per_month


def first_expense_date(expenses: Iterable[Expense]) -> date | None:
    """Date of the earliest expense, the start of a project's holding period."""
    dates = [e.date for e in expenses if e.date is not None]
    return min(dates) if dates else None


def is_realized_sale(unit: Unit) -> bool:
    """A unit counts as sold only with Sold status and a positive sale value."""
    return unit.is_sold and to_decimal(unit.sale_value) > 0


def unit_metrics(
    unit: Unit,
    project: Project,
    inflation_rate: Number = ZERO,
    days_per_month: Number = DEFAULT_DAYS_PER_MONTH,
) -> UnitMetrics | None:
    """Metrics for one unit, or None when it has no realized sale to measure."""
    if not is_realized_sale(unit):
        return None

    cost_basis = resolve_cost_basis(unit, project)
    if cost_basis <= 0:
        return None

    sale_value = to_decimal(unit.sale_value)
    months = holding_months(first_expense_date(project.expenses), unit.sale_date, days_per_month)

    return UnitMetrics(
        unit_id=unit.unit_id,
        identifier=unit.identifier,
        cost_basis=cost_basis,
        is_actual_cost=uses_actual_cost(project),
        sale_value=sale_value,
        metrics=compute_metrics(sale_value - cost_basis, cost_basis, months, inflation_rate),
    )


def average_metrics(metrics_list: list[FinancialMetrics]) -> FinancialMetrics | None:
    """Simple arithmetic mean of a list of metrics.

    Every item weighs the same regardless of its cost basis. The inflation
    rate of the first item is carried over, and ``months`` is reported as 0
    since an average holding period is not meaningful here.
    """
    if not metrics_list:
        return None

    count = Decimal(len(metrics_list))
    return FinancialMetrics(
        profit=sum((m.profit for m in metrics_list), ZERO) / count,
        cost_basis=sum((m.cost_basis for m in metrics_list), ZERO) / count,
        months=ZERO,
        nominal_total_roi=sum((m.nominal_total_roi for m in metrics_list), ZERO) / count,
        nominal_monthly_roi=sum((m.nominal_monthly_roi for m in metrics_list), ZERO) / count,
        real_monthly_roi=sum((m.real_monthly_roi for m in metrics_list), ZERO) / count,
        inflation_rate=metrics_list[0].inflation_rate,
    )
