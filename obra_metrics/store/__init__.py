"""In-memory store for projects and their relationships."""

from obra_metrics.store.projects import ProjectStore, validate_unit

__all__ = ["ProjectStore", "validate_unit"]
