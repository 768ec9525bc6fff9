"""Pure analysis package for eduDashboard.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
database I/O.
"""

from .chart_config_engine import project_chart_data
from .quantity import try_parse_number

__all__ = ["project_chart_data", "try_parse_number"]
