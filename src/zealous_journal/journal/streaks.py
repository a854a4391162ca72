"""Win / loss streaks over closed trades.

A streak is a run of consecutive closed trades with the same outcome,
ordered by ``created_at``.  Two ways to get one:

* :func:`compute_streaks` re-sorts the whole snapshot (O(n log n)).
* :func:`advance_streak` folds one outcome at a time into an explicit
  :class:`StreakState`, for callers that already receive trades in
  order and want to avoid re-sorting.  The state is a plain value;
  nothing is held between calls.

Folding ``advance_streak`` over the sorted closed trades gives the same
numbers as ``compute_streaks``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from zealous_journal.core.enums import StreakType, TradeStatus
from zealous_journal.core.models import TradeRecord


@dataclass(frozen=True)
class StreakState:
    """Running streak counters."""

    current: int = 0
    current_type: StreakType = StreakType.NONE
    largest_win: int = 0
    largest_loss: int = 0


# Same shape; a summary is just the state after the last closed trade.
StreakSummary = StreakState


_OUTCOME = {TradeStatus.WIN: StreakType.WIN, TradeStatus.LOSS: StreakType.LOSS}


def advance_streak(state: StreakState, status: TradeStatus) -> StreakState:
    """Return the state after one more trade with *status*.

    PLANNED / ACTIVE trades are not outcomes and leave the state as is.
    """
    outcome = _OUTCOME.get(status)
    if outcome is None:
        return state

    current = state.current + 1 if state.current_type == outcome else 1
    if outcome == StreakType.WIN:
        return replace(
            state,
            current=current,
            current_type=outcome,
            largest_win=max(state.largest_win, current),
        )
    return replace(
        state,
        current=current,
        current_type=outcome,
        largest_loss=max(state.largest_loss, current),
    )


def sort_closed_trades(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Closed trades, oldest first (see ``TradeRecord.chronological_key``)."""
    return sorted(
        (t for t in trades if t.is_closed),
        key=lambda t: t.chronological_key,
    )


def compute_streaks(trades: Iterable[TradeRecord]) -> StreakSummary:
    """Current and largest win/loss streaks of a trade snapshot."""
    state = StreakState()
    for trade in sort_closed_trades(trades):
        state = advance_streak(state, trade.status)
    return state
