"""Enumerations used across the journal."""

from enum import Enum


class InstrumentCategory(str, Enum):
    FOREX = "Forex"
    COMMODITIES = "Commodities"
    STOCKS = "Stocks"
    INDICES = "Indices"
    CRYPTO = "Crypto"


class TradeDirection(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"


class TradeStatus(str, Enum):
    PLANNED = "PLANNED"
    ACTIVE = "ACTIVE"
    WIN = "WIN"
    LOSS = "LOSS"


class StreakType(str, Enum):
    WIN = "win"
    LOSS = "loss"
    NONE = "none"


# Status spellings found in older stored documents.
LEGACY_STATUS_ALIASES: dict[str, TradeStatus] = {
    "PLANNING": TradeStatus.PLANNED,
    "OPEN": TradeStatus.ACTIVE,
}

# Unit the calculator's lot size is quoted in, per category.
POSITION_UNITS: dict[InstrumentCategory, str] = {
    InstrumentCategory.FOREX: "lots",
    InstrumentCategory.STOCKS: "shares",
    InstrumentCategory.INDICES: "contracts",
    InstrumentCategory.COMMODITIES: "contracts",
    InstrumentCategory.CRYPTO: "coins",
}
