"""Financial metrics engine: cost allocation, ROI and aggregation."""

from obra_metrics.financials.allocation import (
    allocate_costs,
    resolve_cost_basis,
    total_area,
    total_expenses,
    uses_actual_cost,
)
from obra_metrics.financials.budget import (
    build_budget,
    default_macro,
    rollup_budget,
    sync_budget_total,
)
from obra_metrics.financials.portfolio import aggregate, aggregate_portfolio
from obra_metrics.financials.roi import (
    average_metrics,
    compute_metrics,
    first_expense_date,
    holding_months,
    is_realized_sale,
    unit_metrics,
)
from obra_metrics.financials.schedule import s_curve
from obra_metrics.financials.summary import budget_usage, nominal_cost, project_summary

__all__ = [
    "aggregate",
    "aggregate_portfolio",
    "allocate_costs",
    "average_metrics",
    "budget_usage",
    "build_budget",
    "compute_metrics",
    "default_macro",
    "first_expense_date",
    "holding_months",
    "is_realized_sale",
    "nominal_cost",
    "project_summary",
    "resolve_cost_basis",
    "rollup_budget",
    "s_curve",
    "sync_budget_total",
    "total_area",
    "total_expenses",
    "unit_metrics",
    "uses_actual_cost",
]
