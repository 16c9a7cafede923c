"""Scenarios for generating realistic construction portfolios."""

from obra_metrics.scenarios.portfolio import DevelopmentPortfolioScenario

__all__ = ["DevelopmentPortfolioScenario"]
