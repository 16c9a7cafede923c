"""Project store with referential integrity, data-entry validation and audit log."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from obra_metrics.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
    ValidationError,
)
from obra_metrics.financials.budget import default_macro
from obra_metrics.models.base import LogEntry, User, to_decimal
from obra_metrics.models.enums import STAGE_NAMES, ProgressStage, UnitStatus
from obra_metrics.models.project import Expense, Project, Unit

logger = logging.getLogger(__name__)

SYSTEM_USER = User(user_id="system", login="system")

ACTION_CREATE = "Inclusão"
ACTION_UPDATE = "Alteração"
ACTION_DELETE = "Exclusão"

UPDATABLE_UNIT_FIELDS = frozenset(
    {"identifier", "area", "cost", "estimated_sale_value", "sale_value", "sale_date"}
)


def validate_unit(unit: Unit) -> None:
    """Reject units whose figures would make allocation meaningless."""
    if unit.area is None or unit.area < 0:
        raise ValidationError(f"Unit {unit.identifier}: area must be non-negative")
    if to_decimal(unit.cost) < 0:
        raise ValidationError(f"Unit {unit.identifier}: cost must be non-negative")
    if unit.estimated_sale_value is not None and to_decimal(unit.estimated_sale_value) < 0:
        raise ValidationError(f"Unit {unit.identifier}: estimated sale value must be non-negative")
    if unit.sale_value is not None and to_decimal(unit.sale_value) < 0:
        raise ValidationError(f"Unit {unit.identifier}: sale value must be non-negative")


def _display(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, UnitStatus):
        return value.value
    return str(value)


@dataclass
class ProjectStore:
    """In-memory store for projects, their units and expenses."""

    projects: dict[str, Project] = field(default_factory=dict)

    # Relationship indexes
    _unit_projects: dict[str, str] = field(default_factory=dict)
    _expense_projects: dict[str, str] = field(default_factory=dict)

    def add_project(self, project: Project) -> None:
        """Add a project, validating and indexing any units and expenses it carries."""
        if project.project_id in self.projects:
            raise InvalidEntityStateError(f"Project {project.project_id} already exists")
        if not isinstance(project.progress, ProgressStage):
            project.progress = self._coerce_stage(project.progress)

        for unit in project.units:
            validate_unit(unit)
        self._check_new_ids("Unit", [u.unit_id for u in project.units], self._unit_projects)
        self._check_new_ids("Expense", [e.expense_id for e in project.expenses], self._expense_projects)

        self.projects[project.project_id] = project
        for unit in project.units:
            self._unit_projects[unit.unit_id] = project.project_id
        for expense in project.expenses:
            self._expense_projects[expense.expense_id] = project.project_id

        logger.debug("Added project %s (%s)", project.project_id, project.name)

    def get_project(self, project_id: str) -> Project:
        """Get a project by id."""
        try:
            return self.projects[project_id]
        except KeyError:
            raise EntityNotFoundError(f"Project {project_id} not found") from None

    def projects_for_user(self, user: User) -> list[Project]:
        """Projects a user may see: all for admins, allowed ids otherwise."""
        if user.is_admin:
            return list(self.projects.values())
        return [self.projects[pid] for pid in user.allowed_project_ids if pid in self.projects]

    def units_for_user(self, project_id: str, user: User) -> list[Unit]:
        """Units of a project as shown to ``user``.

        Raises EntityNotFoundError when the project is not visible to the
        user. Users without unit access get an empty list.
        """
        project = self.get_project(project_id)
        if not user.is_admin and project_id not in user.allowed_project_ids:
            raise EntityNotFoundError(f"Project {project_id} not found")
        if not user.may_see_units:
            return []
        return list(project.units)

    def project_of_unit(self, unit_id: str) -> Project:
        """Get the project a unit belongs to."""
        if unit_id not in self._unit_projects:
            raise EntityNotFoundError(f"Unit {unit_id} not found")
        return self.projects[self._unit_projects[unit_id]]

    # Units
    def add_unit(self, project_id: str, unit: Unit, user: User | None = None) -> Unit:
        """Register a new unit as Available."""
        project = self._require_project(project_id)
        validate_unit(unit)
        if unit.unit_id in self._unit_projects:
            raise InvalidEntityStateError(f"Unit {unit.unit_id} already exists")

        unit.status = UnitStatus.AVAILABLE
        unit.sale_value = None
        unit.sale_date = None

        project.units.append(unit)
        self._unit_projects[unit.unit_id] = project_id
        self._log(project, user, ACTION_CREATE, "Unidade", "-", unit.identifier)
        return unit

    def add_units(self, project_id: str, units: list[Unit], user: User | None = None) -> list[Unit]:
        """Register a batch of units. Nothing is added if any unit is invalid."""
        self._require_project(project_id)
        for unit in units:
            validate_unit(unit)
        self._check_new_ids("Unit", [u.unit_id for u in units], self._unit_projects)

        added = [self.add_unit(project_id, unit, user) for unit in units]
        logger.info("Added %d units to project %s", len(added), project_id)
        return added

    def update_unit(
        self,
        project_id: str,
        unit_id: str,
        user: User | None = None,
        **changes: Any,
    ) -> Unit:
        """Apply changes to a unit and re-derive its status.

        The unit becomes Sold when its resulting sale value is positive and
        Available otherwise, in which case the sale date is cleared.
        """
        project = self._require_project(project_id)
        unit = self._require_unit(project, unit_id)

        unknown = set(changes) - UPDATABLE_UNIT_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update unit fields: {', '.join(sorted(unknown))}")

        for key in ("cost", "estimated_sale_value", "sale_value"):
            if changes.get(key) is not None:
                changes[key] = to_decimal(changes[key])

        candidate = Unit(**{**unit.__dict__, **changes})
        validate_unit(candidate)

        if to_decimal(candidate.sale_value) > 0:
            changes["status"] = UnitStatus.SOLD
        else:
            changes["status"] = UnitStatus.AVAILABLE
            if unit.sale_date is not None or "sale_date" in changes:
                changes["sale_date"] = None

        old_identifier = unit.identifier
        for key, new_value in changes.items():
            old_value = getattr(unit, key)
            if old_value == new_value:
                continue
            setattr(unit, key, new_value)
            self._log(
                project,
                user,
                ACTION_UPDATE,
                f"Unidade {old_identifier} - {key}",
                _display(old_value),
                _display(new_value),
            )
        return unit

    def record_sale(
        self,
        project_id: str,
        unit_id: str,
        sale_value: Decimal,
        sale_date: Any,
        user: User | None = None,
    ) -> Unit:
        """Mark a unit as sold for ``sale_value`` on ``sale_date``."""
        if to_decimal(sale_value) <= 0:
            raise ValidationError("Sale value must be positive")
        return self.update_unit(
            project_id, unit_id, user, sale_value=sale_value, sale_date=sale_date
        )

    def remove_unit(self, project_id: str, unit_id: str, user: User | None = None) -> Unit:
        """Remove a unit from the active set. The audit log keeps its identifier."""
        project = self._require_project(project_id)
        unit = self._require_unit(project, unit_id)

        project.units.remove(unit)
        del self._unit_projects[unit_id]
        self._log(project, user, ACTION_DELETE, "Unidade", unit.identifier, "-")
        return unit

    # Expenses
    def add_expense(self, project_id: str, expense: Expense, user: User | None = None) -> Expense:
        """Add an expense, filing it under the default macro when untagged."""
        project = self._require_project(project_id)
        if expense.expense_id in self._expense_projects:
            raise InvalidEntityStateError(f"Expense {expense.expense_id} already exists")

        expense.value = to_decimal(expense.value)
        author = user or SYSTEM_USER
        if not expense.user_id:
            expense.user_id = author.user_id
            expense.user_name = author.login

        if project.budget is not None:
            if expense.macro_id:
                macro = project.budget.find_macro(expense.macro_id)
                if macro is None:
                    raise ReferentialIntegrityError(f"Budget macro {expense.macro_id} not found")
                if expense.sub_macro_id and not any(
                    sub.sub_macro_id == expense.sub_macro_id for sub in macro.sub_macros
                ):
                    raise ReferentialIntegrityError(f"Budget sub-macro {expense.sub_macro_id} not found")
            else:
                fallback = default_macro(project.budget)
                if fallback is not None:
                    expense.macro_id = fallback.macro_id

        project.expenses.append(expense)
        self._expense_projects[expense.expense_id] = project_id
        self._log(
            project, user, ACTION_CREATE, "Despesa", "-", f"{expense.description}: {expense.value}"
        )
        return expense

    def remove_expense(self, project_id: str, expense_id: str, user: User | None = None) -> Expense:
        """Remove an expense from a project's ledger."""
        project = self._require_project(project_id)
        for expense in project.expenses:
            if expense.expense_id == expense_id:
                project.expenses.remove(expense)
                del self._expense_projects[expense_id]
                self._log(
                    project, user, ACTION_DELETE, "Despesa", f"{expense.description}: {expense.value}", "-"
                )
                return expense
        raise EntityNotFoundError(f"Expense {expense_id} not found in project {project_id}")

    # Progress
    def set_progress(self, project_id: str, stage: int, user: User | None = None) -> Project:
        """Move a project to another construction stage."""
        project = self._require_project(project_id)
        new_stage = self._coerce_stage(stage)
        if new_stage == project.progress:
            return project

        old_stage = project.progress
        project.progress = new_stage
        self._log(
            project, user, ACTION_UPDATE, "Progresso", STAGE_NAMES[old_stage], STAGE_NAMES[new_stage]
        )
        logger.info(
            "Project %s progress: %s -> %s", project_id, STAGE_NAMES[old_stage], STAGE_NAMES[new_stage]
        )
        return project

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "projects": len(self.projects),
            "units": len(self._unit_projects),
            "sold_units": sum(
                1 for p in self.projects.values() for u in p.units if u.status == UnitStatus.SOLD
            ),
            "expenses": len(self._expense_projects),
            "logs": sum(len(p.logs) for p in self.projects.values()),
        }

    def _require_project(self, project_id: str) -> Project:
        if project_id not in self.projects:
            raise ReferentialIntegrityError(f"Project {project_id} not found")
        return self.projects[project_id]

    @staticmethod
    def _require_unit(project: Project, unit_id: str) -> Unit:
        unit = project.find_unit(unit_id)
        if unit is None:
            raise EntityNotFoundError(f"Unit {unit_id} not found in project {project.project_id}")
        return unit

    @staticmethod
    def _check_new_ids(kind: str, ids: list[str], index: dict[str, str]) -> None:
        seen: set[str] = set()
        for entity_id in ids:
            if entity_id in index or entity_id in seen:
                raise InvalidEntityStateError(f"{kind} {entity_id} already exists")
            seen.add(entity_id)

    @staticmethod
    def _coerce_stage(stage: int) -> ProgressStage:
        try:
            return ProgressStage(stage)
        except ValueError:
            raise InvalidEntityStateError(
                f"Invalid progress stage {stage!r}: must be 0-100 in steps of 10"
            ) from None

    @staticmethod
    def _log(
        project: Project,
        user: User | None,
        action: str,
        field_name: str,
        old_value: str,
        new_value: str,
    ) -> None:
        author = user or SYSTEM_USER
        project.logs.append(
            LogEntry(
                log_id=uuid.uuid4().hex,
                timestamp=datetime.now(),
                user_id=author.user_id,
                user_name=author.login,
                action=action,
                field=field_name,
                old_value=old_value,
                new_value=new_value,
            )
        )
