"""Position sizing from account risk and price levels.

Turns an account size, a risk percentage and entry / stop / exit prices
into a lot size that risks exactly the requested dollar amount, plus the
dollar loss at the stop, the dollar profit at the exit and the resulting
reward-to-risk ratio.

The function never raises for numeric input.  Zero, negative or
non-finite prices give a zeroed result; ``risk_amount`` is still
reported because it depends only on account size and risk percentage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from zealous_journal.core.enums import TradeDirection
from zealous_journal.core.instruments import get_instrument
from zealous_journal.core.models import InstrumentSpec
from zealous_journal.core.numeric import finite_or_zero, safe_div

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationResult:
    """Output of :func:`compute_position_sizing`."""

    risk_amount: float = 0.0  # account_size * risk% / 100
    stop_loss_pips: float = 0.0
    profit_pips: float = 0.0
    lot_size: float = 0.0  # in ``position_unit``
    profit_dollars: float = 0.0
    loss_dollars: float = 0.0  # reconstructs risk_amount when lot_size > 0
    risk_reward_ratio: float = 0.0
    trade_direction: TradeDirection | None = None
    position_unit: str = "units"

    def to_dict(self) -> dict[str, Any]:
        return {
            "risk_amount": self.risk_amount,
            "stop_loss_pips": self.stop_loss_pips,
            "profit_pips": self.profit_pips,
            "lot_size": self.lot_size,
            "profit_dollars": self.profit_dollars,
            "loss_dollars": self.loss_dollars,
            "risk_reward_ratio": self.risk_reward_ratio,
            "trade_direction": (
                self.trade_direction.value if self.trade_direction else None
            ),
            "position_unit": self.position_unit,
        }


def _positive(value: Any) -> float:
    """Finite positive float or 0.0."""
    f = finite_or_zero(value)
    return f if f > 0 else 0.0


def _infer_direction(entry: float, stop: float, exit_: float) -> TradeDirection:
    if exit_ > 0 and exit_ != entry:
        return TradeDirection.LONG if exit_ > entry else TradeDirection.SHORT
    # No usable target: a stop below entry protects a long
    return TradeDirection.LONG if entry > stop else TradeDirection.SHORT


def compute_position_sizing(
    account_size: float,
    risk_percentage: float,
    entry_price: float,
    stop_loss: float,
    exit_price: float | None,
    instrument: InstrumentSpec,
) -> CalculationResult:
    """Size a position so that hitting the stop loses ``risk_amount``.

    Args:
        account_size: Account equity in account currency.
        risk_percentage: Percent of the account to risk (``2`` = 2%).
        entry_price: Planned entry.
        stop_loss: Stop-loss price.
        exit_price: Take-profit price, or *None* for a risk-only sizing.
        instrument: Pip metadata for the traded symbol.

    Returns:
        :class:`CalculationResult`.  With ``entry_price == stop_loss``
        the stop distance is zero, so ``lot_size`` and ``loss_dollars``
        are 0 while ``risk_amount`` is unaffected.  An unusable
        ``exit_price`` leaves the profit side at 0.
    """
    unit = instrument.position_unit

    account = _positive(account_size)
    risk_pct = _positive(risk_percentage)
    risk_amount = finite_or_zero(account * risk_pct / 100)

    entry = _positive(entry_price)
    stop = _positive(stop_loss)
    if entry == 0 or stop == 0:
        logger.debug(
            "Sizing skipped for %s: invalid prices entry=%r stop=%r",
            instrument.symbol, entry_price, stop_loss,
        )
        return CalculationResult(risk_amount=risk_amount, position_unit=unit)

    exit_ = _positive(exit_price) if exit_price is not None else 0.0

    pip_value = instrument.pip_value

    stop_loss_pips = finite_or_zero(instrument.price_to_pips(entry - stop))
    profit_pips = finite_or_zero(instrument.price_to_pips(exit_ - entry)) if exit_ else 0.0

    if stop_loss_pips == 0:
        lot_size = 0.0
    else:
        lot_size = safe_div(risk_amount, stop_loss_pips * pip_value)

    loss_dollars = finite_or_zero(stop_loss_pips * pip_value * lot_size)
    profit_dollars = finite_or_zero(profit_pips * pip_value * lot_size)
    risk_reward_ratio = safe_div(profit_dollars, loss_dollars)

    return CalculationResult(
        risk_amount=risk_amount,
        stop_loss_pips=stop_loss_pips,
        profit_pips=profit_pips,
        lot_size=lot_size,
        profit_dollars=profit_dollars,
        loss_dollars=loss_dollars,
        risk_reward_ratio=risk_reward_ratio,
        trade_direction=_infer_direction(entry, stop, exit_),
        position_unit=unit,
    )


def compute_position_sizing_for_symbol(
    account_size: float,
    risk_percentage: float,
    entry_price: float,
    stop_loss: float,
    exit_price: float | None,
    symbol: str,
) -> CalculationResult:
    """Like :func:`compute_position_sizing`, resolving *symbol* in the registry.

    Raises:
        UnknownInstrumentError: *symbol* is not a registered instrument.
    """
    return compute_position_sizing(
        account_size,
        risk_percentage,
        entry_price,
        stop_loss,
        exit_price,
        get_instrument(symbol),
    )
