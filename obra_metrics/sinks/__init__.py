"""Output sinks for exporting projects and metrics."""

from obra_metrics.sinks.console import ConsoleSink
from obra_metrics.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
