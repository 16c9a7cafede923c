"""Financial metrics and cost allocation for construction projects."""

__version__ = "0.1.0"
