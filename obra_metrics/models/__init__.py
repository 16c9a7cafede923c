"""Domain models for construction project management."""

from obra_metrics.models.base import LogEntry, User, to_decimal
from obra_metrics.models.budget import (
    BudgetMacro,
    BudgetSubMacro,
    CostTemplate,
    ProjectBudget,
    TemplateMacro,
    TemplateSubMacro,
)
from obra_metrics.models.enums import (
    STAGE_ABBREV,
    STAGE_NAMES,
    ProgressStage,
    UnitStatus,
    UserRole,
)
from obra_metrics.models.metrics import (
    BudgetLine,
    BudgetRollup,
    FinancialMetrics,
    PortfolioSummary,
    ProjectFinancialSummary,
    SCurvePoint,
    UnitMetrics,
)
from obra_metrics.models.project import Expense, Project, Unit

__all__ = [
    "STAGE_ABBREV",
    "STAGE_NAMES",
    "BudgetLine",
    "BudgetMacro",
    "BudgetRollup",
    "BudgetSubMacro",
    "CostTemplate",
    "Expense",
    "FinancialMetrics",
    "LogEntry",
    "PortfolioSummary",
    "ProgressStage",
    "Project",
    "ProjectBudget",
    "ProjectFinancialSummary",
    "SCurvePoint",
    "TemplateMacro",
    "TemplateSubMacro",
    "Unit",
    "UnitMetrics",
    "UnitStatus",
    "User",
    "UserRole",
    "to_decimal",
]
