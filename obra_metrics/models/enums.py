"""Enumeration types for construction project entities."""

from enum import Enum, IntEnum


class UnitStatus(str, Enum):
    AVAILABLE = "Available"
    SOLD = "Sold"


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    STANDARD = "STANDARD"


class ProgressStage(IntEnum):
    """Construction phase, expressed as percent complete in steps of 10."""

    PLANNING = 0
    FOUNDATION = 10
    STRUCTURE = 20
    BRICKWORK = 30
    ROOFING = 40
    ROUGH_INSTALLS = 50
    INTERNAL_FINISH = 60
    DOORS_WINDOWS = 70
    FINAL_DETAILS = 80
    FINISHING = 90
    COMPLETED = 100

    @property
    def display_name(self) -> str:
        return STAGE_NAMES[self]

    @property
    def abbreviation(self) -> str:
        return STAGE_ABBREV[self]


STAGE_NAMES: dict[ProgressStage, str] = {
    ProgressStage.PLANNING: "Planejamento",
    ProgressStage.FOUNDATION: "Fundação",
    ProgressStage.STRUCTURE: "Estrutura",
    ProgressStage.BRICKWORK: "Alvenaria",
    ProgressStage.ROOFING: "Cobertura",
    ProgressStage.ROUGH_INSTALLS: "Instalações Brutas",
    ProgressStage.INTERNAL_FINISH: "Revestimentos Internos",
    ProgressStage.DOORS_WINDOWS: "Esquadrias",
    ProgressStage.FINAL_DETAILS: "Acabamentos",
    ProgressStage.FINISHING: "Finalização",
    ProgressStage.COMPLETED: "Obra Concluída",
}

# Short labels for narrow layouts
STAGE_ABBREV: dict[ProgressStage, str] = {
    ProgressStage.PLANNING: "PLN",
    ProgressStage.FOUNDATION: "FUN",
    ProgressStage.STRUCTURE: "EST",
    ProgressStage.BRICKWORK: "ALV",
    ProgressStage.ROOFING: "COB",
    ProgressStage.ROUGH_INSTALLS: "INST",
    ProgressStage.INTERNAL_FINISH: "REV",
    ProgressStage.DOORS_WINDOWS: "ESQ",
    ProgressStage.FINAL_DETAILS: "ACAB",
    ProgressStage.FINISHING: "FIN",
    ProgressStage.COMPLETED: "✓",
}
