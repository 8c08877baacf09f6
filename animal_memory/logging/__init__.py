"""Round logging module."""

from .formatters import format_layout, format_states
from .round_logger import RoundLogger

__all__ = [
    "RoundLogger",
    "format_layout",
    "format_states",
]
