"""Read-only trade sources."""

from .json_source import JsonTradeSource

__all__ = ["JsonTradeSource"]
