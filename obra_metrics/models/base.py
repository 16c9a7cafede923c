"""Base models and helpers shared across the domain."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from obra_metrics.models.enums import UserRole

ZERO = Decimal("0")


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Convert a numeric value to Decimal, treating None as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass
class User:
    """Application user as seen by the project store."""

    user_id: str
    login: str
    role: UserRole = UserRole.STANDARD
    allowed_project_ids: list[str] = field(default_factory=list)
    can_see_units: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def may_see_units(self) -> bool:
        """Admins always see units; other users only when allowed."""
        return self.is_admin or self.can_see_units


@dataclass
class LogEntry:
    """Audit trail entry for a project change."""

    log_id: str
    timestamp: datetime
    user_id: str
    user_name: str
    action: str  # Inclusão, Alteração, Exclusão
    field: str
    old_value: str
    new_value: str
