"""Budget and sales position of a single project."""

from datetime import date
from decimal import Decimal

from obra_metrics.financials.allocation import total_expenses
from obra_metrics.financials.roi import (
    DEFAULT_DAYS_PER_MONTH,
    Number,
    first_expense_date,
    holding_months,
)
from obra_metrics.models.base import ZERO, to_decimal
from obra_metrics.models.enums import UnitStatus
from obra_metrics.models.metrics import ProjectFinancialSummary
from obra_metrics.models.project import Project


def nominal_cost(project: Project) -> Decimal:
    """Sum of the nominal unit costs, which is the project's budget."""
    return sum((to_decimal(u.cost) for u in project.units), ZERO)


def budget_usage(project: Project) -> Decimal:
    """Percent of the nominal budget already spent, 0 without a budget."""
    budget = nominal_cost(project)
    if budget > 0:
        return total_expenses(project.expenses) / budget * 100
    return ZERO


def project_summary(
    project: Project,
    as_of: date,
    days_per_month: Number = DEFAULT_DAYS_PER_MONTH,
) -> ProjectFinancialSummary:
    """Compute the headline figures of a project.

    Estimated ROI compares the estimated sale value of every unit against
    the nominal budget, and its monthly figure spreads it over the months
    elapsed between the first expense and ``as_of``.
    """
    budget = nominal_cost(project)
    spent = total_expenses(project.expenses)
    estimated_sales = sum((to_decimal(u.estimated_sale_value) for u in project.units), ZERO)
    estimated_profit = estimated_sales - budget

    estimated_roi = estimated_profit / budget if budget > 0 else ZERO
    months = holding_months(first_expense_date(project.expenses), as_of, days_per_month)
    estimated_monthly_roi = estimated_roi / months if months > 0 else ZERO

    sold = [u for u in project.units if u.status == UnitStatus.SOLD]
    available = [u for u in project.units if u.status == UnitStatus.AVAILABLE]

    return ProjectFinancialSummary(
        project_id=project.project_id,
        unit_count=project.unit_count,
        sold_count=len(sold),
        total_nominal_cost=budget,
        total_expenses=spent,
        budget_balance=budget - spent,
        budget_usage=budget_usage(project),
        realized_revenue=sum((to_decimal(u.sale_value) for u in sold), ZERO),
        potential_revenue=sum((to_decimal(u.estimated_sale_value) for u in available), ZERO),
        total_estimated_sales=estimated_sales,
        estimated_gross_profit=estimated_profit,
        estimated_roi=estimated_roi,
        estimated_monthly_roi=estimated_monthly_roi,
        months_elapsed=months,
    )
