"""Trade snapshots from a JSON export file.

The file holds the persisted trade documents in their stored camelCase
shape, either as a bare array or wrapped as ``{"trades": [...]}`` (the
shape the journal API responds with)::

    [
      {"_id": "t1", "symbol": "EUR/USD", "status": "WIN",
       "entryPrice": 1.1, "stopLoss": 1.095, "profitDollars": 150,
       "createdAt": "2024-01-05T09:30:00Z", "accountId": "acc-1"},
      ...
    ]

The file is re-read on every call, so each call returns a fresh
snapshot.  Nothing is ever written.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from zealous_journal.core.errors import TradeSourceError
from zealous_journal.core.models import TradeRecord

logger = logging.getLogger(__name__)

_TRADES = TypeAdapter(list[TradeRecord])


class JsonTradeSource:
    """:class:`~zealous_journal.core.interfaces.ITradeSource` over a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Any:
        try:
            with open(self._path, encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as exc:
            raise TradeSourceError(f"Trade file not found: {self._path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise TradeSourceError(f"Cannot read trade file {self._path}: {exc}") from exc

    def list_trades(self, account_id: str | None = None) -> list[TradeRecord]:
        """Validate every document and return those of *account_id*.

        Args:
            account_id: Keep only trades of this account; all when None.

        Raises:
            TradeSourceError: Missing file, invalid JSON, unexpected
                top-level shape, or a document that fails validation.
        """
        data = self._read()
        if isinstance(data, dict) and "trades" in data:
            data = data["trades"]
        if not isinstance(data, list):
            raise TradeSourceError(
                f"{self._path}: expected a JSON array of trades, "
                f"got {type(data).__name__}"
            )

        try:
            trades = _TRADES.validate_python(data)
        except ValidationError as exc:
            raise TradeSourceError(f"Invalid trade data in {self._path}: {exc}") from exc

        if account_id is not None:
            trades = [t for t in trades if t.account_id == account_id]

        logger.info(
            "Loaded %d trades from %s (account=%s)",
            len(trades), self._path.name, account_id or "*",
        )
        return trades
