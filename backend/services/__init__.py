"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .diff_generator import DiffGenerator, diff_chars, diff_lines, project_rows, split_lines
from .lcs import DiffTooLargeError, diff_sequences

__all__ = [
    "ConfigManager",
    "DiffGenerator",
    "DiffTooLargeError",
    "diff_sequences",
    "diff_lines",
    "diff_chars",
    "project_rows",
    "split_lines",
]
