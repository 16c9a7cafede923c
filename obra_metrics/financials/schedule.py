"""S-curve: cumulative planned versus actual spend per month."""

from collections.abc import Iterable, Iterator
from datetime import date
from decimal import Decimal

from obra_metrics.financials.roi import first_expense_date
from obra_metrics.financials.summary import nominal_cost
from obra_metrics.models.base import ZERO, to_decimal
from obra_metrics.models.metrics import SCurvePoint
from obra_metrics.models.project import Project

MONTH_ABBREV = ("jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez")


def calendar_months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end``, at least 1."""
    months = (end.year - start.year) * 12 + end.month - start.month
    return months if months > 0 else 1


def month_label(month: date) -> str:
    """Short month label such as ``jan/25``."""
    return f"{MONTH_ABBREV[month.month - 1]}/{month.year % 100:02d}"


def _iter_months(first: date, last: date) -> Iterator[date]:
    current = date(first.year, first.month, 1)
    end = date(last.year, last.month, 1)
    while current <= end:
        yield current
        if current.month == 12:
            current = date(current.year + 1, 1, 1)
        else:
            current = date(current.year, current.month + 1, 1)


def _project_start(project: Project) -> date | None:
    return project.start_date or first_expense_date(project.expenses)


def s_curve(projects: Iterable[Project], as_of: date) -> list[SCurvePoint]:
    """Build monthly S-curve points across projects.

    The timeline runs from the earliest project start (first expense date
    when a start date is missing) to the later of ``as_of`` and the latest
    delivery date. Planned spend spreads each project's nominal cost evenly
    over its start..delivery months; projects without both dates or
    without a nominal cost contribute no planned spend.

    Returns an empty list when no project has a known start.
    """
    projects = list(projects)
    starts = [s for s in (_project_start(p) for p in projects) if s is not None]
    if not starts:
        return []

    deliveries = [p.delivery_date for p in projects if p.delivery_date is not None]
    last = max([as_of, *deliveries])

    monthly_plan: list[tuple[date, date, Decimal]] = []
    for project in projects:
        cost = nominal_cost(project)
        if project.start_date and project.delivery_date and cost > 0:
            duration = calendar_months_between(project.start_date, project.delivery_date)
            monthly_plan.append((project.start_date, project.delivery_date, cost / duration))

    spend_by_month: dict[tuple[int, int], Decimal] = {}
    for project in projects:
        for expense in project.expenses:
            key = (expense.date.year, expense.date.month)
            spend_by_month[key] = spend_by_month.get(key, ZERO) + to_decimal(expense.value)

    points = []
    planned = ZERO
    actual = ZERO
    for month in _iter_months(min(starts), last):
        actual += spend_by_month.get((month.year, month.month), ZERO)
        for start, delivery, monthly_cost in monthly_plan:
            if start <= month <= delivery:
                planned += monthly_cost

        points.append(
            SCurvePoint(
                month=month,
                label=month_label(month),
                planned=planned,
                actual=actual if month <= as_of else None,
            )
        )

    return points
