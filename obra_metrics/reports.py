"""Project status report contents.

Builds the data a renderer (PDF, HTML) lays out: header, financial summary,
budget detail by macro stage and the full expense statement.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from obra_metrics.financials.budget import rollup_budget
from obra_metrics.financials.summary import project_summary
from obra_metrics.models.enums import STAGE_NAMES, ProgressStage
from obra_metrics.models.metrics import BudgetLine, ProjectFinancialSummary
from obra_metrics.models.project import Expense, Project


@dataclass
class ReportHeader:
    project_name: str
    progress: int
    stage_name: str
    start_date: date | None
    delivery_date: date | None
    unit_count: int
    generated_by: str
    generated_on: date


@dataclass
class ProjectReport:
    """Everything shown in a project status report."""

    header: ReportHeader
    summary: ProjectFinancialSummary
    budget_lines: list[BudgetLine] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)  # Newest first
    file_name: str = ""

    @property
    def summary_rows(self) -> list[tuple[str, Decimal | str]]:
        """Label/value pairs of the financial summary table."""
        s = self.summary
        return [
            ("Orçamento Total", s.total_nominal_cost),
            ("Total Gasto (Realizado)", s.total_expenses),
            ("Saldo Disponível", s.budget_balance),
            ("Vendas Realizadas", s.realized_revenue),
            ("Potencial de Venda", s.potential_revenue),
            ("Unidades Vendidas", f"{s.sold_count} / {s.unit_count}"),
        ]


def report_file_name(project_name: str, on: date) -> str:
    """File name such as ``Relatorio_Residencial_Aurora_2025-03-01.pdf``."""
    slug = re.sub(r"\s+", "_", project_name.strip())
    return f"Relatorio_{slug}_{on.isoformat()}.pdf"


def build_project_report(project: Project, generated_by: str, as_of: date) -> ProjectReport:
    """Assemble the status report of a project as of a date."""
    stage = ProgressStage(project.progress)
    header = ReportHeader(
        project_name=project.name,
        progress=int(stage),
        stage_name=STAGE_NAMES[stage],
        start_date=project.start_date,
        delivery_date=project.delivery_date,
        unit_count=project.unit_count,
        generated_by=generated_by,
        generated_on=as_of,
    )

    budget_lines: list[BudgetLine] = []
    if project.budget is not None and project.budget.macros:
        budget_lines = rollup_budget(project.budget, project.expenses).lines

    return ProjectReport(
        header=header,
        summary=project_summary(project, as_of),
        budget_lines=budget_lines,
        expenses=sorted(project.expenses, key=lambda e: e.date, reverse=True),
        file_name=report_file_name(project.name, as_of),
    )
