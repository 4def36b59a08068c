"""Output sinks for exporting portfolio data."""

from loan_ops.sinks.console import ConsoleSink
from loan_ops.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
