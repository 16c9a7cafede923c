"""Categorized budget: creation from templates, resync and spend rollups."""

import uuid
from collections.abc import Iterable
from decimal import Decimal

from obra_metrics.models.base import ZERO, to_decimal
from obra_metrics.models.budget import (
    BudgetMacro,
    BudgetSubMacro,
    CostTemplate,
    ProjectBudget,
)
from obra_metrics.models.metrics import BudgetLine, BudgetRollup
from obra_metrics.models.project import Expense

FALLBACK_MACRO_NAMES = ("Geral/Outros", "Outros")

HUNDRED = Decimal("100")


def _share(total: Decimal, percentage: Decimal) -> Decimal:
    return total * to_decimal(percentage) / HUNDRED


def _usage(spent: Decimal, estimated: Decimal) -> Decimal:
    return spent / estimated * HUNDRED if estimated > 0 else ZERO


def build_budget(
    project_id: str,
    total_estimated: Decimal,
    template: CostTemplate,
) -> ProjectBudget:
    """Create a project budget distributing ``total_estimated`` by template.

    Macro estimates are the macro percentage of the total; sub-macro
    estimates are the sub-macro percentage of their macro estimate.
    """
    total = to_decimal(total_estimated)
    budget = ProjectBudget(
        budget_id=uuid.uuid4().hex,
        project_id=project_id,
        total_estimated=total,
        template_id=template.template_id,
    )

    for tmpl_macro in sorted(template.macros, key=lambda m: m.display_order):
        macro_value = _share(total, tmpl_macro.percentage)
        macro = BudgetMacro(
            macro_id=uuid.uuid4().hex,
            budget_id=budget.budget_id,
            name=tmpl_macro.name,
            percentage=to_decimal(tmpl_macro.percentage),
            estimated_value=macro_value,
            display_order=tmpl_macro.display_order,
        )
        for tmpl_sub in sorted(tmpl_macro.sub_macros, key=lambda s: s.display_order):
            macro.sub_macros.append(
                BudgetSubMacro(
                    sub_macro_id=uuid.uuid4().hex,
                    macro_id=macro.macro_id,
                    name=tmpl_sub.name,
                    percentage=to_decimal(tmpl_sub.percentage),
                    estimated_value=_share(macro_value, tmpl_sub.percentage),
                    display_order=tmpl_sub.display_order,
                )
            )
        budget.macros.append(macro)

    return budget


def sync_budget_total(
    budget: ProjectBudget,
    units_total: Decimal,
    tolerance: Decimal = Decimal("1"),
) -> bool:
    """Rescale a budget when the units' nominal total has drifted from it.

    Returns
    -------
    bool
        True when the budget was rescaled. Nothing changes when the drift
        is within ``tolerance`` or ``units_total`` is not positive.
    """
    units_total = to_decimal(units_total)
    if units_total <= 0 or abs(budget.total_estimated - units_total) <= tolerance:
        return False

    budget.total_estimated = units_total
    for macro in budget.macros:
        macro.estimated_value = _share(units_total, macro.percentage)
        for sub in macro.sub_macros:
            sub.estimated_value = _share(macro.estimated_value, sub.percentage)
    return True


def default_macro(budget: ProjectBudget) -> BudgetMacro | None:
    """Catch-all macro that receives expenses entered without a category."""
    for name in FALLBACK_MACRO_NAMES:
        for macro in budget.macros:
            if macro.name == name:
                return macro
    return None


def rollup_budget(budget: ProjectBudget, expenses: Iterable[Expense]) -> BudgetRollup:
    """Sum tagged expenses into the budget's macro and sub-macro lines."""
    spent_by_macro: dict[str, Decimal] = {}
    spent_by_sub: dict[str, Decimal] = {}
    untagged = ZERO
    total_spent = ZERO

    for expense in expenses:
        value = to_decimal(expense.value)
        total_spent += value
        if expense.macro_id and budget.find_macro(expense.macro_id) is not None:
            spent_by_macro[expense.macro_id] = spent_by_macro.get(expense.macro_id, ZERO) + value
            if expense.sub_macro_id:
                spent_by_sub[expense.sub_macro_id] = spent_by_sub.get(expense.sub_macro_id, ZERO) + value
        else:
            untagged += value

    lines = []
    for macro in sorted(budget.macros, key=lambda m: m.display_order):
        spent = spent_by_macro.get(macro.macro_id, ZERO)
        children = [
            BudgetLine(
                category_id=sub.sub_macro_id,
                name=sub.name,
                estimated_value=sub.estimated_value,
                spent_value=spent_by_sub.get(sub.sub_macro_id, ZERO),
                usage=_usage(spent_by_sub.get(sub.sub_macro_id, ZERO), sub.estimated_value),
                display_order=sub.display_order,
            )
            for sub in sorted(macro.sub_macros, key=lambda s: s.display_order)
        ]
        lines.append(
            BudgetLine(
                category_id=macro.macro_id,
                name=macro.name,
                estimated_value=macro.estimated_value,
                spent_value=spent,
                usage=_usage(spent, macro.estimated_value),
                display_order=macro.display_order,
                children=children,
            )
        )

    return BudgetRollup(
        budget_id=budget.budget_id,
        total_estimated=budget.total_estimated,
        total_spent=total_spent,
        untagged_spent=untagged,
        lines=lines,
    )
