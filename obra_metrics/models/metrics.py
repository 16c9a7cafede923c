"""Derived financial records. Computed on demand, never persisted."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from obra_metrics.models.base import ZERO


@dataclass
class FinancialMetrics:
    """ROI decomposition for a single sale or an average of sales."""

    profit: Decimal
    cost_basis: Decimal
    months: Decimal  # Holding period
    nominal_total_roi: Decimal  # 0.20 for 20%
    nominal_monthly_roi: Decimal  # Linear: total / months
    real_monthly_roi: Decimal  # Nominal monthly minus inflation
    inflation_rate: Decimal  # Monthly rate used


@dataclass
class UnitMetrics:
    """Per-unit figures shown on a unit card."""

    unit_id: str
    identifier: str
    cost_basis: Decimal
    is_actual_cost: bool  # True when allocated from actual project spend
    sale_value: Decimal
    metrics: FinancialMetrics


@dataclass
class PortfolioSummary:
    """Aggregated sales and ROI figures for one or more projects."""

    avg_roi: Decimal = ZERO
    avg_monthly_roi: Decimal = ZERO
    avg_real_monthly_roi: Decimal = ZERO
    sold_count: int = 0
    available_count: int = 0
    qualifying_count: int = 0  # Sales averaged into the ROI figures
    realized_revenue: Decimal = ZERO
    potential_revenue: Decimal = ZERO

    @property
    def sales_performance(self) -> Decimal:
        """Percent of units sold, 0 when there are no units."""
        total = self.sold_count + self.available_count
        if total > 0:
            return Decimal(self.sold_count) / Decimal(total) * 100
        return ZERO


@dataclass
class ProjectFinancialSummary:
    """Budget and sales position of a single project."""

    project_id: str
    unit_count: int
    sold_count: int
    total_nominal_cost: Decimal
    total_expenses: Decimal
    budget_balance: Decimal
    budget_usage: Decimal  # Percent of nominal cost already spent
    realized_revenue: Decimal
    potential_revenue: Decimal
    total_estimated_sales: Decimal
    estimated_gross_profit: Decimal
    estimated_roi: Decimal
    estimated_monthly_roi: Decimal
    months_elapsed: Decimal


@dataclass
class BudgetLine:
    """Planned versus spent for one budget category."""

    category_id: str
    name: str
    estimated_value: Decimal
    spent_value: Decimal
    usage: Decimal  # Percent of estimate spent
    display_order: int = 0
    children: list["BudgetLine"] = field(default_factory=list)

    @property
    def remaining(self) -> Decimal:
        return self.estimated_value - self.spent_value


@dataclass
class BudgetRollup:
    """Budget execution grouped by macro category."""

    budget_id: str
    total_estimated: Decimal
    total_spent: Decimal
    untagged_spent: Decimal
    lines: list[BudgetLine] = field(default_factory=list)

    @property
    def remaining(self) -> Decimal:
        return self.total_estimated - self.total_spent

    @property
    def overall_progress(self) -> Decimal:
        if self.total_estimated > 0:
            return self.total_spent / self.total_estimated * 100
        return ZERO


@dataclass
class SCurvePoint:
    """Cumulative planned and actual spend at the end of a month."""

    month: date  # First day of the month
    label: str  # e.g. "jan/25"
    planned: Decimal
    actual: Decimal | None  # None for months after the reference date
