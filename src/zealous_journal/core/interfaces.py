"""Protocol interfaces for the journal's external collaborators.

The analytics core only ever receives an already-materialised trade
snapshot; where it comes from is behind these protocols.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import TradeRecord


@runtime_checkable
class ITradeSource(Protocol):
    """Read-only access to journaled trades."""

    def list_trades(self, account_id: str | None = None) -> list[TradeRecord]:
        """All trades for *account_id* (every account when ``None``)."""
        ...
