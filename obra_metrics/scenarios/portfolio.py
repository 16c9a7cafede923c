"""Development portfolio scenario: several projects at mixed stages."""

from __future__ import annotations

import logging
import random
from datetime import date

from obra_metrics.generators.project import ProjectGenerator
from obra_metrics.models.enums import ProgressStage
from obra_metrics.store.projects import ProjectStore

logger = logging.getLogger(__name__)


class DevelopmentPortfolioScenario:
    """Generate a portfolio of construction projects.

    This scenario creates:
    - Completed projects, where actual spend is final and cost bases are
      allocated by floor area
    - Projects under construction at random stages
    - Sold units with sale dates after the first expense, and Available
      units carrying estimated sale values
    """

    def __init__(
        self,
        num_projects: int = 5,
        units_per_project: int = 8,
        completed_rate: float = 0.4,
        sold_rate: float = 0.5,
        seed: int | None = None,
        today: date | None = None,
    ) -> None:
        """Initialize the portfolio scenario.

        Parameters
        ----------
        num_projects : int
            Number of projects to generate.
        units_per_project : int
            Units per project.
        completed_rate : float
            Share of projects at 100% (0.0 to 1.0).
        sold_rate : float
            Share of units sold in each project.
        seed : int | None
            Random seed for reproducibility.
        today : date | None
            Reference date for all generated dates.
        """
        self.num_projects = num_projects
        self.units_per_project = units_per_project
        self.completed_rate = completed_rate
        self.sold_rate = sold_rate
        self.seed = seed
        self.today = today or date.today()

        self._rng = random.Random(seed)
        self.store = ProjectStore()
        self._project_gen = ProjectGenerator(seed=seed)

    def generate(self) -> ProjectStore:
        """Generate all projects of the scenario.

        Returns
        -------
        ProjectStore
            Store containing all generated projects.
        """
        logger.info(
            "Starting portfolio scenario: %d projects, %d units each",
            self.num_projects,
            self.units_per_project,
        )

        num_completed = int(self.num_projects * self.completed_rate)
        in_progress = [s for s in ProgressStage if s != ProgressStage.COMPLETED]

        for i in range(self.num_projects):
            stage = ProgressStage.COMPLETED if i < num_completed else self._rng.choice(in_progress)
            project = self._project_gen.generate(
                num_units=self.units_per_project,
                progress=stage,
                sold_rate=self.sold_rate,
                today=self.today,
            )
            self.store.add_project(project)
            logger.debug("Generated %s at %s", project.name, stage.display_name)

        logger.info("Generated portfolio: %s", self.store.summary())
        return self.store
