"""Sample data generators."""

from obra_metrics.generators.project import ExpenseGenerator, ProjectGenerator, default_template
from obra_metrics.generators.units import UnitGenerator, build_unit_batch

__all__ = [
    "ExpenseGenerator",
    "ProjectGenerator",
    "UnitGenerator",
    "build_unit_batch",
    "default_template",
]
