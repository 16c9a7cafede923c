"""Project and expense generators for sample portfolios."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from obra_metrics.financials.budget import build_budget
from obra_metrics.generators.base import BaseGenerator
from obra_metrics.generators.units import UnitGenerator
from obra_metrics.models.base import to_decimal
from obra_metrics.models.budget import CostTemplate, ProjectBudget, TemplateMacro, TemplateSubMacro
from obra_metrics.models.enums import ProgressStage, UnitStatus
from obra_metrics.models.project import Expense, Project, Unit


def default_template() -> CostTemplate:
    """Standard residential cost distribution by construction macro stage."""
    macros = [
        ("Serviços Preliminares", "3", []),
        ("Fundação", "10", [("Escavação", "30"), ("Concreto e Aço", "70")]),
        ("Estrutura", "20", [("Formas", "25"), ("Armação", "35"), ("Concretagem", "40")]),
        ("Alvenaria", "12", []),
        ("Cobertura", "8", []),
        ("Instalações", "15", [("Elétrica", "50"), ("Hidráulica", "50")]),
        ("Revestimentos", "14", []),
        ("Esquadrias", "8", []),
        ("Acabamentos", "7", []),
        ("Geral/Outros", "3", []),
    ]
    return CostTemplate(
        template_id="00000000-0000-0000-0000-000000000001",
        name="Residencial Padrão",
        macros=[
            TemplateMacro(
                name=name,
                percentage=Decimal(pct),
                display_order=order,
                sub_macros=[
                    TemplateSubMacro(name=sub, percentage=Decimal(sub_pct), display_order=i)
                    for i, (sub, sub_pct) in enumerate(subs)
                ],
            )
            for order, (name, pct, subs) in enumerate(macros)
        ],
    )


class ExpenseGenerator(BaseGenerator):
    """Generate synthetic expenses for a project ledger."""

    DESCRIPTIONS = [
        "Cimento CP-II",
        "Areia média",
        "Brita 1",
        "Vergalhão CA-50",
        "Tijolo cerâmico",
        "Mão de obra pedreiro",
        "Mão de obra servente",
        "Telhas",
        "Fios e cabos",
        "Tubos PVC",
        "Porcelanato",
        "Tinta acrílica",
        "Portas e janelas",
        "Locação de betoneira",
    ]

    def generate(
        self,
        start: date,
        end: date,
        budget: ProjectBudget | None = None,
        value: Decimal | None = None,
    ) -> Expense:
        """Generate one expense dated between ``start`` and ``end``."""
        span = max((end - start).days, 0)
        expense_date = start + timedelta(days=self.rng.randint(0, span))
        amount = value if value is not None else Decimal(str(round(self.rng.uniform(300, 25000), 2)))

        macro_id = sub_macro_id = None
        if budget is not None and budget.macros:
            macro = self.rng.choice(budget.macros)
            macro_id = macro.macro_id
            if macro.sub_macros:
                sub_macro_id = self.rng.choice(macro.sub_macros).sub_macro_id

        return Expense(
            expense_id=self.fake.uuid4(),
            description=self.rng.choice(self.DESCRIPTIONS),
            value=to_decimal(amount),
            date=expense_date,
            user_id=self.fake.uuid4(),
            user_name=self.fake.first_name().lower(),
            macro_id=macro_id,
            sub_macro_id=sub_macro_id,
        )

    def generate_ledger(
        self,
        total: Decimal,
        start: date,
        end: date,
        count: int,
        budget: ProjectBudget | None = None,
    ) -> Iterator[Expense]:
        """Split ``total`` into ``count`` expenses spread over ``start``..``end``.

        The values add up to ``total`` exactly; the last expense absorbs
        rounding.
        """
        total = to_decimal(total)
        if count <= 0 or total <= 0:
            return
        weights = [self.rng.uniform(0.5, 1.5) for _ in range(count)]
        weight_sum = sum(weights)
        remaining = total
        for i, weight in enumerate(weights):
            if i == count - 1:
                value = remaining
            else:
                value = (total * Decimal(str(weight / weight_sum))).quantize(Decimal("0.01"))
                remaining -= value
            yield self.generate(start, end, budget=budget, value=value)


class ProjectGenerator(BaseGenerator):
    """Generate complete sample projects with units, budget and expenses."""

    NAME_PREFIXES = ["Residencial", "Condomínio", "Villa", "Edifício", "Jardim"]

    def __init__(self, seed: int | None = None, locale: str = "pt_BR") -> None:
        super().__init__(seed, locale)
        self._unit_gen = UnitGenerator(seed=seed, locale=locale)
        self._expense_gen = ExpenseGenerator(seed=seed, locale=locale)

    def generate(
        self,
        num_units: int = 6,
        progress: ProgressStage | None = None,
        sold_rate: float = 0.0,
        today: date | None = None,
        expenses_per_unit: int = 4,
    ) -> Project:
        """Generate a project.

        Parameters
        ----------
        num_units : int
            Number of units.
        progress : ProgressStage | None
            Construction stage (random when omitted).
        sold_rate : float
            Share of units sold (0.0 to 1.0).
        today : date | None
            Reference date; start and sale dates fall before it.
        expenses_per_unit : int
            Ledger size relative to the unit count.
        """
        today = today or date.today()
        if progress is None:
            progress = self.rng.choice(list(ProgressStage))

        duration_days = self.rng.randint(360, 900)
        start = today - timedelta(days=int(duration_days * progress / 100) + 30)
        delivery = start + timedelta(days=duration_days)

        units = list(self._unit_gen.generate_batch(num_units, prefix=self.rng.choice(UnitGenerator.PREFIXES)))
        project_id = self.fake.uuid4()
        nominal_total = sum((u.cost for u in units), Decimal("0"))
        budget = build_budget(project_id, nominal_total, default_template())

        # Actual spend tracks progress, with an overrun or saving of up to 15%
        spent = nominal_total * Decimal(int(progress)) / 100
        spent = (spent * Decimal(str(round(self.rng.uniform(0.85, 1.15), 4)))).quantize(Decimal("0.01"))
        expense_end = min(today, delivery)
        expenses = list(
            self._expense_gen.generate_ledger(
                spent, start, expense_end, num_units * expenses_per_unit, budget=budget
            )
        )

        for unit in units:
            if self.rng.random() < sold_rate:
                self._sell(unit, start, today)

        return Project(
            project_id=project_id,
            name=f"{self.rng.choice(self.NAME_PREFIXES)} {self.fake.last_name()}",
            progress=progress,
            units=units,
            expenses=expenses,
            start_date=start,
            delivery_date=delivery,
            budget=budget,
        )

    def generate_batch(self, count: int, **kwargs) -> Iterator[Project]:
        """Generate ``count`` projects with the same parameters."""
        for _ in range(count):
            yield self.generate(**kwargs)

    def _sell(self, unit: Unit, start: date, today: date) -> None:
        base = unit.estimated_sale_value or unit.cost
        unit.sale_value = Decimal(str(round(float(base) * self.rng.uniform(0.9, 1.1), -3)))
        unit.sale_date = start + timedelta(days=self.rng.randint(1, max((today - start).days, 1)))
        unit.status = UnitStatus.SOLD
