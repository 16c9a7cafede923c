"""Budget category models (macro and sub-macro stages)."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class TemplateSubMacro:
    """Sub-category of a cost template macro."""

    name: str
    percentage: Decimal  # Share of the parent macro, 0-100
    display_order: int = 0
    description: str = ""


@dataclass
class TemplateMacro:
    """Cost template macro category (e.g. Fundação, Estrutura)."""

    name: str
    percentage: Decimal  # Share of the total budget, 0-100
    display_order: int = 0
    sub_macros: list[TemplateSubMacro] = field(default_factory=list)


@dataclass
class CostTemplate:
    """Reusable distribution of a budget across macro categories."""

    template_id: str
    name: str
    macros: list[TemplateMacro] = field(default_factory=list)


@dataclass
class BudgetSubMacro:
    """Sub-category of a project budget macro."""

    sub_macro_id: str
    macro_id: str
    name: str
    percentage: Decimal
    estimated_value: Decimal
    display_order: int = 0


@dataclass
class BudgetMacro:
    """Macro category of a project budget."""

    macro_id: str
    budget_id: str
    name: str
    percentage: Decimal
    estimated_value: Decimal
    display_order: int = 0
    sub_macros: list[BudgetSubMacro] = field(default_factory=list)


@dataclass
class ProjectBudget:
    """Categorized budget attached to a project."""

    budget_id: str
    project_id: str
    total_estimated: Decimal
    template_id: str | None = None
    macros: list[BudgetMacro] = field(default_factory=list)

    def find_macro(self, macro_id: str) -> BudgetMacro | None:
        for macro in self.macros:
            if macro.macro_id == macro_id:
                return macro
        return None
