"""Unit generation: numbered batches and synthetic units."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Callable, Iterator

from obra_metrics.exceptions import ValidationError
from obra_metrics.generators.base import BaseGenerator
from obra_metrics.models.base import to_decimal
from obra_metrics.models.enums import UnitStatus
from obra_metrics.models.project import Unit


def _new_id() -> str:
    return uuid.uuid4().hex


def build_unit_batch(
    prefix: str,
    count: int,
    area: float,
    cost: Decimal,
    estimated_sale_value: Decimal | None = None,
    start: int = 1,
    pad: int = 2,
    id_factory: Callable[[], str] | None = None,
) -> list[Unit]:
    """Build ``count`` identical units numbered from ``start``.

    Parameters
    ----------
    prefix : str
        Identifier prefix, e.g. ``"Casa"`` gives ``"Casa 01"``, ``"Casa 02"``.
    count : int
        Number of units.
    area, cost, estimated_sale_value
        Specs shared by every unit of the batch.
    start : int
        First number of the sequence.
    pad : int
        Zero padding of the number.
    id_factory : Callable[[], str] | None
        Unit id factory (default: random UUID hex).

    Returns
    -------
    list[Unit]
        Units with Available status.
    """
    if count < 0:
        raise ValidationError("count must be non-negative")

    new_id = id_factory or _new_id
    return [
        Unit(
            unit_id=new_id(),
            identifier=f"{prefix} {number:0{pad}d}",
            area=area,
            cost=to_decimal(cost),
            status=UnitStatus.AVAILABLE,
            estimated_sale_value=(
                to_decimal(estimated_sale_value) if estimated_sale_value is not None else None
            ),
        )
        for number in range(start, start + count)
    ]


class UnitGenerator(BaseGenerator):
    """Generate synthetic units with plausible areas, costs and prices."""

    PREFIXES = ["Casa", "Apto", "Sobrado", "Lote"]

    # Build cost and sale price per square meter (BRL)
    COST_PER_SQM = (2200, 3800)
    MARGIN_RANGE = (0.15, 0.60)

    def generate(self, identifier: str | None = None) -> Unit:
        """Generate a single Available unit."""
        area = round(self.rng.uniform(45, 220), 2)
        cost_per_sqm = self.rng.uniform(*self.COST_PER_SQM)
        cost = Decimal(str(round(area * cost_per_sqm, -2)))
        margin = self.rng.uniform(*self.MARGIN_RANGE)
        estimated = Decimal(str(round(float(cost) * (1 + margin), -3)))

        return Unit(
            unit_id=self.fake.uuid4(),
            identifier=identifier or f"{self.rng.choice(self.PREFIXES)} {self.rng.randint(1, 99):02d}",
            area=area,
            cost=cost,
            status=UnitStatus.AVAILABLE,
            estimated_sale_value=estimated,
        )

    def generate_batch(self, count: int, prefix: str = "Casa") -> Iterator[Unit]:
        """Generate ``count`` units numbered ``<prefix> 01`` onwards.

        Yields
        ------
        Unit
            Generated units.
        """
        for number in range(1, count + 1):
            yield self.generate(identifier=f"{prefix} {number:02d}")
