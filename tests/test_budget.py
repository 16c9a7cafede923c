"""Tests for categorized budgets."""

from datetime import date
from decimal import Decimal

import pytest

from obra_metrics.financials.budget import (
    build_budget,
    default_macro,
    rollup_budget,
    sync_budget_total,
)
from obra_metrics.generators import default_template
from obra_metrics.models import CostTemplate, ProjectBudget, TemplateMacro


@pytest.fixture
def budget() -> ProjectBudget:
    """Budget of 100 000 distributed by the default template."""
    return build_budget("proj-001", Decimal("100000"), default_template())


def _macro(budget: ProjectBudget, name: str):
    return next(m for m in budget.macros if m.name == name)


class TestBuildBudget:
    """Tests for build_budget."""

    def test_macros_follow_template_percentages(self, budget: ProjectBudget) -> None:
        assert budget.project_id == "proj-001"
        assert budget.total_estimated == Decimal("100000")
        assert _macro(budget, "Fundação").estimated_value == Decimal("10000")
        assert _macro(budget, "Estrutura").estimated_value == Decimal("20000")

    def test_macros_sum_to_total(self, budget: ProjectBudget) -> None:
        assert sum(m.estimated_value for m in budget.macros) == Decimal("100000")

    def test_sub_macros_share_their_macro(self, budget: ProjectBudget) -> None:
        fundacao = _macro(budget, "Fundação")
        subs = {s.name: s for s in fundacao.sub_macros}

        assert subs["Escavação"].estimated_value == Decimal("3000")
        assert subs["Concreto e Aço"].estimated_value == Decimal("7000")
        assert all(s.macro_id == fundacao.macro_id for s in fundacao.sub_macros)

    def test_macros_ordered_by_display_order(self) -> None:
        template = CostTemplate(
            template_id="t",
            name="Invertido",
            macros=[
                TemplateMacro(name="B", percentage=Decimal("40"), display_order=2),
                TemplateMacro(name="A", percentage=Decimal("60"), display_order=1),
            ],
        )
        budget = build_budget("p", Decimal("1000"), template)

        assert [m.name for m in budget.macros] == ["A", "B"]
        assert budget.template_id == "t"


class TestSyncBudgetTotal:
    """Tests for sync_budget_total."""

    def test_small_drift_is_ignored(self, budget: ProjectBudget) -> None:
        assert sync_budget_total(budget, Decimal("100000.50")) is False
        assert budget.total_estimated == Decimal("100000")

    def test_non_positive_total_is_ignored(self, budget: ProjectBudget) -> None:
        assert sync_budget_total(budget, Decimal("0")) is False

    def test_rescales_macros_and_subs(self, budget: ProjectBudget) -> None:
        assert sync_budget_total(budget, Decimal("200000")) is True

        fundacao = _macro(budget, "Fundação")
        assert budget.total_estimated == Decimal("200000")
        assert fundacao.estimated_value == Decimal("20000")
        assert {s.name: s.estimated_value for s in fundacao.sub_macros}["Escavação"] == Decimal("6000")


class TestDefaultMacro:
    """Tests for default_macro."""

    def test_finds_catch_all(self, budget: ProjectBudget) -> None:
        assert default_macro(budget).name == "Geral/Outros"

    def test_none_without_catch_all(self) -> None:
        template = CostTemplate(
            template_id="t",
            name="Sem Geral",
            macros=[TemplateMacro(name="Fundação", percentage=Decimal("100"))],
        )
        assert default_macro(build_budget("p", Decimal("1000"), template)) is None


class TestRollupBudget:
    """Tests for rollup_budget."""

    def test_spend_by_category(self, budget: ProjectBudget, expense_factory) -> None:
        fundacao = _macro(budget, "Fundação")
        escavacao = fundacao.sub_macros[0]
        expenses = [
            expense_factory(
                "e1", "2000", date(2024, 1, 5), macro_id=fundacao.macro_id, sub_macro_id=escavacao.sub_macro_id
            ),
            expense_factory("e2", "1000", date(2024, 1, 6), macro_id=fundacao.macro_id),
            expense_factory("e3", "500", date(2024, 1, 7)),
            expense_factory("e4", "300", date(2024, 1, 8), macro_id="unknown"),
        ]

        rollup = rollup_budget(budget, expenses)

        assert rollup.total_spent == Decimal("3800")
        assert rollup.untagged_spent == Decimal("800")
        assert rollup.remaining == Decimal("96200")

        line = next(line for line in rollup.lines if line.name == "Fundação")
        assert line.spent_value == Decimal("3000")
        assert line.usage == Decimal("30")
        assert line.remaining == Decimal("7000")

        child = next(c for c in line.children if c.name == "Escavação")
        assert child.spent_value == Decimal("2000")
        assert child.usage == Decimal("2000") / Decimal("3000") * 100

    def test_lines_follow_display_order(self, budget: ProjectBudget) -> None:
        rollup = rollup_budget(budget, [])
        orders = [line.display_order for line in rollup.lines]

        assert orders == sorted(orders)
        assert rollup.total_spent == 0
        assert rollup.overall_progress == 0

    def test_overall_progress(self, budget: ProjectBudget, expense_factory) -> None:
        rollup = rollup_budget(budget, [expense_factory("e", "25000", date(2024, 1, 1))])
        assert rollup.overall_progress == Decimal("25")

    def test_zero_estimate_usage_is_zero(self, expense_factory) -> None:
        template = CostTemplate(
            template_id="t",
            name="Zero",
            macros=[TemplateMacro(name="Geral/Outros", percentage=Decimal("100"))],
        )
        budget = build_budget("p", Decimal("0"), template)
        macro = budget.macros[0]

        rollup = rollup_budget(
            budget, [expense_factory("e", "100", date(2024, 1, 1), macro_id=macro.macro_id)]
        )

        assert rollup.lines[0].usage == 0
        assert rollup.overall_progress == 0
