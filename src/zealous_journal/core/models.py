"""Core domain models: instrument specs and journal trade records.

These are the canonical input types for the sizing calculator and the
analytics engine. Both are frozen: the core reads snapshots and never
mutates them.
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import (
    LEGACY_STATUS_ALIASES,
    POSITION_UNITS,
    InstrumentCategory,
    TradeDirection,
    TradeStatus,
)
from .numeric import finite_or_zero


# ---------------------------------------------------------------------------
# Instrument metadata
# ---------------------------------------------------------------------------

class InstrumentSpec(BaseModel):
    """Static pip/contract metadata for one tradable symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: str  # "EUR/USD", "AAPL", "SPX500"
    name: str = ""
    category: InstrumentCategory
    pip_value: float = Field(gt=0)  # currency per pip per standard lot
    pip_size: float = Field(gt=0)  # price units per pip
    contract_size: float = Field(default=1.0, gt=0)

    @property
    def position_unit(self) -> str:
        """Unit the calculator's lot size is expressed in."""
        return POSITION_UNITS.get(self.category, "units")

    def price_to_pips(self, price_diff: float) -> float:
        """Convert an absolute price distance to pips."""
        return abs(price_diff) / self.pip_size


# ---------------------------------------------------------------------------
# Journal trade record
# ---------------------------------------------------------------------------

class TradeRecord(BaseModel):
    """One journaled trade, as read from the trade store.

    Accepts both the stored camelCase shape (``entryPrice``,
    ``createdAt``, ...) and snake_case field names. ``profit_dollars``
    is expected on WIN trades and ``loss_dollars`` on LOSS trades, but
    neither is enforced: aggregation treats a missing amount as 0.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    symbol: str = ""
    category: InstrumentCategory | None = None
    entry_price: float = 0.0
    exit_price: float | None = None
    stop_loss: float = 0.0
    account_size_at_entry: float | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "accountSizeAtEntry", "account_size_at_entry", "accountSize"
        ),
    )
    risk_percentage: float | None = None
    trade_direction: TradeDirection = TradeDirection.LONG
    status: TradeStatus = TradeStatus.PLANNED
    profit_dollars: float | None = None
    loss_dollars: float | None = None
    risk_reward_ratio: float | None = None
    created_at: datetime
    tags: frozenset[str] = frozenset()
    account_id: str = ""

    @field_validator("id", "account_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("status", mode="before")
    @classmethod
    def _normalise_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            key = v.strip().upper()
            return LEGACY_STATUS_ALIASES.get(key, key)
        return v

    @field_validator("trade_direction", mode="before")
    @classmethod
    def _normalise_direction(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("category", mode="before")
    @classmethod
    def _normalise_category(cls, v: Any) -> Any:
        if v is None or isinstance(v, InstrumentCategory):
            return v
        text = str(v).strip().lower()
        for category in InstrumentCategory:
            if category.value.lower() == text:
                return category
        return None  # free-text categories are not part of the registry

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, v: Any) -> Any:
        return frozenset() if v is None else v

    # ------------------------------------------------------------------ #
    # Derived values                                                       #
    # ------------------------------------------------------------------ #

    @property
    def is_closed(self) -> bool:
        return self.status in (TradeStatus.WIN, TradeStatus.LOSS)

    @property
    def signed_pnl(self) -> float:
        """Realised P&L: +profit on WIN, -loss on LOSS, 0 otherwise."""
        if self.status == TradeStatus.WIN:
            return finite_or_zero(self.profit_dollars)
        if self.status == TradeStatus.LOSS:
            return -finite_or_zero(self.loss_dollars)
        return 0.0

    @property
    def risk_amount(self) -> float:
        """Dollar risk planned at entry (account size x risk %)."""
        account = finite_or_zero(self.account_size_at_entry)
        risk_pct = finite_or_zero(self.risk_percentage)
        if account <= 0 or risk_pct <= 0:
            return 0.0
        return finite_or_zero(account * risk_pct / 100)

    def trade_date(self, tz: tzinfo | None = None) -> date:
        """Calendar date of ``created_at``.

        Aware timestamps are converted to *tz* first when one is given;
        naive timestamps are already local wall time.
        """
        ts = self.created_at
        if tz is not None and ts.tzinfo is not None:
            ts = ts.astimezone(tz)
        return ts.date()

    @property
    def chronological_key(self) -> tuple[datetime, str]:
        """Sort key that orders naive and aware timestamps together.

        Aware timestamps are compared in UTC, naive ones as if already
        UTC; ``id`` breaks ties so ordering is deterministic.
        """
        ts = self.created_at
        if ts.tzinfo is not None:
            ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
        return ts, self.id
