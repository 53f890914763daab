"""Output formatters for analysis results."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter, find_base_path

__all__ = ["BaseFormatter", "JsonFormatter", "RichFormatter", "find_base_path"]
