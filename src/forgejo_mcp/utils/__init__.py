"""
Utility functions for the Forgejo MCP server.
"""

from .date import format_date, format_duration, parse_datetime
from .io import is_read_only_mode
from .logging import mask_sensitive

__all__ = [
    "format_date",
    "format_duration",
    "is_read_only_mode",
    "mask_sensitive",
    "parse_datetime",
]
