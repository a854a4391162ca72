"""Custom exception hierarchy for the journal.

The analytics and sizing functions never raise for well-typed input;
these errors belong to the edges (config files, instrument lookup,
trade sources).
"""


class JournalError(Exception):
    """Base exception for all journal errors."""


# --- Configuration ---
class ConfigError(JournalError):
    """Invalid or missing configuration."""


# --- Instruments ---
class InstrumentError(JournalError):
    """Instrument registry error."""


class UnknownInstrumentError(InstrumentError, KeyError):
    """Symbol is not present in the instrument registry."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Unknown instrument: {symbol!r}")

    def __str__(self) -> str:
        return self.args[0]


# --- Trade sources ---
class TradeSourceError(JournalError):
    """Trade snapshot could not be read or validated."""
