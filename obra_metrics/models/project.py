"""Project aggregate: units, expenses and audit log."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from obra_metrics.models.base import LogEntry
from obra_metrics.models.budget import ProjectBudget
from obra_metrics.models.enums import ProgressStage, UnitStatus


@dataclass
class Unit:
    """Sellable unit (house, apartment, lot) of a project."""

    unit_id: str
    identifier: str  # e.g. "Casa 01", "Apto 302"
    area: float  # Square meters
    cost: Decimal  # Nominal (estimated) build cost
    status: UnitStatus = UnitStatus.AVAILABLE
    estimated_sale_value: Decimal | None = None
    sale_value: Decimal | None = None
    sale_date: date | None = None

    @property
    def is_sold(self) -> bool:
        return self.status == UnitStatus.SOLD


@dataclass
class Expense:
    """Expense entry in a project's ledger."""

    expense_id: str
    description: str
    value: Decimal
    date: date
    user_id: str = ""
    user_name: str = ""
    macro_id: str | None = None
    sub_macro_id: str | None = None


@dataclass
class Project:
    """Construction project, the aggregate root for units and expenses."""

    project_id: str
    name: str
    progress: ProgressStage = ProgressStage.PLANNING
    units: list[Unit] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    logs: list[LogEntry] = field(default_factory=list)
    start_date: date | None = None
    delivery_date: date | None = None
    budget: ProjectBudget | None = None

    @property
    def is_completed(self) -> bool:
        return self.progress == ProgressStage.COMPLETED

    @property
    def unit_count(self) -> int:
        return len(self.units)

    def find_unit(self, unit_id: str) -> Unit | None:
        """Return the unit with the given id, if present."""
        for unit in self.units:
            if unit.unit_id == unit_id:
                return unit
        return None
