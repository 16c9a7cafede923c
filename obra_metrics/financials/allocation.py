"""Cost basis resolution and area-proportional allocation of actual spend.

While a project is under construction each unit is valued at its nominal
(estimated) cost. Once the project reaches 100% the actual total spend is
final, and it is redistributed across units in proportion to floor area,
so overruns and savings land on each unit according to the space it
occupies.
"""

from collections.abc import Iterable
from decimal import Decimal

from obra_metrics.models.base import ZERO, to_decimal
from obra_metrics.models.project import Expense, Project, Unit


def total_area(units: Iterable[Unit]) -> Decimal:
    """Sum of unit floor areas."""
    return sum((to_decimal(u.area) for u in units), ZERO)


def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    """Sum of expense values."""
    return sum((to_decimal(e.value) for e in expenses), ZERO)


def uses_actual_cost(project: Project) -> bool:
    """Whether unit cost bases come from actual spend rather than estimates."""
    return project.is_completed and total_area(project.units) > 0


def resolve_cost_basis(unit: Unit, project: Project) -> Decimal:
    """Cost used as the ROI denominator for ``unit``.

    Parameters
    ----------
    unit : Unit
        Unit whose cost basis is resolved. Its area is compared against
        the areas of every unit in ``project``.
    project : Project
        Project the unit belongs to.

    Returns
    -------
    Decimal
        ``unit.area / total_area * total_expenses`` for a completed project
        with positive total area, otherwise ``unit.cost``. A non-positive
        allocated share (no expenses, zero-area unit) also falls back to
        the nominal cost.
    """
    nominal = to_decimal(unit.cost)
    area_total = total_area(project.units)

    if not (project.is_completed and area_total > 0):
        return nominal

    share = to_decimal(unit.area) * total_expenses(project.expenses) / area_total
    return share if share > 0 else nominal


def allocate_costs(project: Project) -> dict[str, Decimal]:
    """Resolve the cost basis of every unit in a project, keyed by unit id."""
    return {unit.unit_id: resolve_cost_basis(unit, project) for unit in project.units}
