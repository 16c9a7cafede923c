"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from obra_metrics.models import (
    Expense,
    ProgressStage,
    Project,
    Unit,
    UnitStatus,
    User,
    UserRole,
)


def make_unit(
    unit_id: str,
    area: float,
    cost: str,
    status: UnitStatus = UnitStatus.AVAILABLE,
    estimated: str | None = None,
    sale_value: str | None = None,
    sale_date: date | None = None,
) -> Unit:
    """Build a unit with Decimal money fields from strings."""
    return Unit(
        unit_id=unit_id,
        identifier=f"Casa {unit_id}",
        area=area,
        cost=Decimal(cost),
        status=status,
        estimated_sale_value=Decimal(estimated) if estimated is not None else None,
        sale_value=Decimal(sale_value) if sale_value is not None else None,
        sale_date=sale_date,
    )


def make_expense(expense_id: str, value: str, on: date, **kwargs) -> Expense:
    """Build an expense with a Decimal value from a string."""
    return Expense(
        expense_id=expense_id,
        description=f"Despesa {expense_id}",
        value=Decimal(value),
        date=on,
        **kwargs,
    )


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed reference date."""
    return date(2025, 6, 30)


@pytest.fixture
def completed_project() -> Project:
    """Completed project with 300 m² of units and 150 000 of actual spend."""
    return Project(
        project_id="proj-001",
        name="Residencial Aurora",
        progress=ProgressStage.COMPLETED,
        units=[
            make_unit("u1", 100.0, "50000"),
            make_unit("u2", 200.0, "80000"),
        ],
        expenses=[
            make_expense("e1", "100000", date(2024, 1, 10)),
            make_expense("e2", "50000", date(2024, 6, 10)),
        ],
        start_date=date(2024, 1, 1),
        delivery_date=date(2025, 1, 1),
    )


@pytest.fixture
def in_progress_project() -> Project:
    """Project under construction with one sold and two available units."""
    return Project(
        project_id="proj-002",
        name="Villa Serena",
        progress=ProgressStage.STRUCTURE,
        units=[
            make_unit(
                "v1",
                80.0,
                "100000",
                status=UnitStatus.SOLD,
                sale_value="120000",
                sale_date=date(2024, 11, 9),
            ),
            make_unit("v2", 80.0, "100000", estimated="150000"),
            make_unit("v3", 120.0, "140000", estimated="200000"),
        ],
        expenses=[
            make_expense("f1", "30000", date(2024, 1, 10)),
            make_expense("f2", "500000", date(2024, 3, 1)),
        ],
        start_date=date(2024, 1, 1),
        delivery_date=date(2025, 12, 1),
    )


@pytest.fixture
def admin_user() -> User:
    """Administrator who sees every project."""
    return User(user_id="admin-1", login="admin", role=UserRole.ADMIN, can_see_units=True)


@pytest.fixture
def standard_user() -> User:
    """Standard user restricted to one project."""
    return User(user_id="user-1", login="maria", allowed_project_ids=["proj-002"])


@pytest.fixture
def unit_factory():
    """Factory for units with Decimal money fields."""
    return make_unit


@pytest.fixture
def expense_factory():
    """Factory for expenses with Decimal values."""
    return make_expense
