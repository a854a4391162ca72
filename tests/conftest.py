"""Shared fixtures for the zealous-journal test suite."""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta
from typing import Any, Callable

import pytest

from zealous_journal.core.enums import TradeDirection, TradeStatus
from zealous_journal.core.instruments import get_instrument
from zealous_journal.core.models import InstrumentSpec, TradeRecord


# ---------------------------------------------------------------------------
# Instruments
# ---------------------------------------------------------------------------

@pytest.fixture
def eurusd() -> InstrumentSpec:
    return get_instrument("EUR/USD")


@pytest.fixture
def usdjpy() -> InstrumentSpec:
    return get_instrument("USD/JPY")


# ---------------------------------------------------------------------------
# Trade factories
# ---------------------------------------------------------------------------

@pytest.fixture
def base_time() -> datetime:
    return datetime(2024, 1, 15, 10, 0, 0)


@pytest.fixture
def make_trade(base_time) -> Callable[..., TradeRecord]:
    """Factory for TradeRecord with sensible defaults; ids are t1, t2, ..."""
    counter = itertools.count(1)

    def _make(**overrides: Any) -> TradeRecord:
        n = next(counter)
        data: dict[str, Any] = {
            "id": f"t{n}",
            "symbol": "EUR/USD",
            "entry_price": 1.1,
            "stop_loss": 1.095,
            "account_size_at_entry": 10_000.0,
            "risk_percentage": 1.0,
            "trade_direction": TradeDirection.LONG,
            "status": TradeStatus.PLANNED,
            "created_at": base_time + timedelta(minutes=n),
            "account_id": "acc-1",
        }
        data.update(overrides)
        return TradeRecord(**data)

    return _make


@pytest.fixture
def make_win(make_trade) -> Callable[..., TradeRecord]:
    def _make(profit: float = 100.0, **overrides: Any) -> TradeRecord:
        return make_trade(status=TradeStatus.WIN, profit_dollars=profit, **overrides)

    return _make


@pytest.fixture
def make_loss(make_trade) -> Callable[..., TradeRecord]:
    def _make(loss: float = 50.0, **overrides: Any) -> TradeRecord:
        return make_trade(status=TradeStatus.LOSS, loss_dollars=loss, **overrides)

    return _make
