"""Static instrument registry.

Pip size, pip value and contract size for every symbol the journal can
size a position in. The table is built once at import time and never
changes; lookups hand out the same frozen :class:`InstrumentSpec`
objects.

Forex pip values are quoted per standard lot in the account currency
(USD); no FX conversion is applied.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .enums import InstrumentCategory
from .errors import UnknownInstrumentError
from .models import InstrumentSpec

_FX = InstrumentCategory.FOREX
_CMD = InstrumentCategory.COMMODITIES
_STK = InstrumentCategory.STOCKS
_IDX = InstrumentCategory.INDICES
_CRYPTO = InstrumentCategory.CRYPTO

# (symbol, name, category, pip_value, pip_size, contract_size)
_SPECS: list[tuple[str, str, InstrumentCategory, float, float, float]] = [
    # Major Forex Pairs
    ("EUR/USD", "Euro / US Dollar", _FX, 10, 0.0001, 100000),
    ("GBP/USD", "British Pound / US Dollar", _FX, 10, 0.0001, 100000),
    ("USD/JPY", "US Dollar / Japanese Yen", _FX, 10, 0.01, 100000),
    ("USD/CHF", "US Dollar / Swiss Franc", _FX, 10, 0.0001, 100000),
    ("AUD/USD", "Australian Dollar / US Dollar", _FX, 10, 0.0001, 100000),
    ("USD/CAD", "US Dollar / Canadian Dollar", _FX, 10, 0.0001, 100000),
    ("NZD/USD", "New Zealand Dollar / US Dollar", _FX, 10, 0.0001, 100000),

    # Minor Forex Pairs
    ("EUR/GBP", "Euro / British Pound", _FX, 10, 0.0001, 100000),
    ("EUR/JPY", "Euro / Japanese Yen", _FX, 10, 0.01, 100000),
    ("GBP/JPY", "British Pound / Japanese Yen", _FX, 10, 0.01, 100000),
    ("AUD/JPY", "Australian Dollar / Japanese Yen", _FX, 10, 0.01, 100000),
    ("CHF/JPY", "Swiss Franc / Japanese Yen", _FX, 10, 0.01, 100000),
    ("CAD/JPY", "Canadian Dollar / Japanese Yen", _FX, 10, 0.01, 100000),
    ("EUR/AUD", "Euro / Australian Dollar", _FX, 10, 0.0001, 100000),
    ("GBP/AUD", "British Pound / Australian Dollar", _FX, 10, 0.0001, 100000),
    ("EUR/CAD", "Euro / Canadian Dollar", _FX, 10, 0.0001, 100000),
    ("GBP/CAD", "British Pound / Canadian Dollar", _FX, 10, 0.0001, 100000),
    ("AUD/CAD", "Australian Dollar / Canadian Dollar", _FX, 10, 0.0001, 100000),
    ("NZD/CAD", "New Zealand Dollar / Canadian Dollar", _FX, 10, 0.0001, 100000),
    ("EUR/CHF", "Euro / Swiss Franc", _FX, 10, 0.0001, 100000),
    ("GBP/CHF", "British Pound / Swiss Franc", _FX, 10, 0.0001, 100000),
    ("AUD/CHF", "Australian Dollar / Swiss Franc", _FX, 10, 0.0001, 100000),
    ("CAD/CHF", "Canadian Dollar / Swiss Franc", _FX, 10, 0.0001, 100000),
    ("NZD/CHF", "New Zealand Dollar / Swiss Franc", _FX, 10, 0.0001, 100000),
    ("NZD/JPY", "New Zealand Dollar / Japanese Yen", _FX, 10, 0.01, 100000),
    ("GBP/NZD", "British Pound / New Zealand Dollar", _FX, 10, 0.0001, 100000),
    ("EUR/NZD", "Euro / New Zealand Dollar", _FX, 10, 0.0001, 100000),
    ("AUD/NZD", "Australian Dollar / New Zealand Dollar", _FX, 10, 0.0001, 100000),

    # Exotic Forex Pairs
    ("USD/SEK", "US Dollar / Swedish Krona", _FX, 10, 0.0001, 100000),
    ("USD/NOK", "US Dollar / Norwegian Krone", _FX, 10, 0.0001, 100000),
    ("USD/DKK", "US Dollar / Danish Krone", _FX, 10, 0.0001, 100000),
    ("USD/PLN", "US Dollar / Polish Zloty", _FX, 10, 0.0001, 100000),
    ("USD/CZK", "US Dollar / Czech Koruna", _FX, 10, 0.0001, 100000),
    ("USD/HUF", "US Dollar / Hungarian Forint", _FX, 10, 0.01, 100000),
    ("USD/TRY", "US Dollar / Turkish Lira", _FX, 10, 0.0001, 100000),
    ("USD/ZAR", "US Dollar / South African Rand", _FX, 10, 0.0001, 100000),
    ("USD/MXN", "US Dollar / Mexican Peso", _FX, 10, 0.0001, 100000),
    ("USD/SGD", "US Dollar / Singapore Dollar", _FX, 10, 0.0001, 100000),
    ("USD/HKD", "US Dollar / Hong Kong Dollar", _FX, 10, 0.0001, 100000),
    ("USD/CNH", "US Dollar / Chinese Yuan Offshore", _FX, 10, 0.0001, 100000),

    # Commodities: Metals
    ("XAU/USD", "Gold / US Dollar", _CMD, 0.1, 0.1, 1),
    ("XAG/USD", "Silver / US Dollar", _CMD, 5, 0.01, 5000),
    ("XPT/USD", "Platinum / US Dollar", _CMD, 1, 0.1, 50),
    ("XPD/USD", "Palladium / US Dollar", _CMD, 1, 0.1, 100),
    ("XCU/USD", "Copper / US Dollar", _CMD, 25, 0.0001, 25000),

    # Commodities: Energy
    ("WTI/USD", "West Texas Intermediate Oil", _CMD, 10, 0.01, 1000),
    ("BRENT/USD", "Brent Crude Oil", _CMD, 10, 0.01, 1000),
    ("NGAS/USD", "Natural Gas", _CMD, 10, 0.001, 10000),

    # Commodities: Agriculture
    ("WHEAT/USD", "Wheat", _CMD, 12.5, 0.25, 5000),
    ("CORN/USD", "Corn", _CMD, 12.5, 0.25, 5000),
    ("SOYBEAN/USD", "Soybeans", _CMD, 12.5, 0.25, 5000),
    ("SUGAR/USD", "Sugar", _CMD, 11.2, 0.01, 112000),
    ("COFFEE/USD", "Coffee", _CMD, 3.75, 0.05, 37500),
    ("COCOA/USD", "Cocoa", _CMD, 10, 1, 10),
    ("COTTON/USD", "Cotton", _CMD, 5, 0.01, 50000),

    # Major US Stocks
    ("AAPL", "Apple Inc.", _STK, 1, 0.01, 100),
    ("MSFT", "Microsoft Corporation", _STK, 1, 0.01, 100),
    ("GOOGL", "Alphabet Inc. Class A", _STK, 1, 0.01, 100),
    ("AMZN", "Amazon.com Inc.", _STK, 1, 0.01, 100),
    ("TSLA", "Tesla Inc.", _STK, 1, 0.01, 100),
    ("META", "Meta Platforms Inc.", _STK, 1, 0.01, 100),
    ("NVDA", "NVIDIA Corporation", _STK, 1, 0.01, 100),
    ("NFLX", "Netflix Inc.", _STK, 1, 0.01, 100),
    ("AMD", "Advanced Micro Devices", _STK, 1, 0.01, 100),
    ("INTC", "Intel Corporation", _STK, 1, 0.01, 100),
    ("CRM", "Salesforce Inc.", _STK, 1, 0.01, 100),
    ("ORCL", "Oracle Corporation", _STK, 1, 0.01, 100),
    ("ADBE", "Adobe Inc.", _STK, 1, 0.01, 100),
    ("PYPL", "PayPal Holdings Inc.", _STK, 1, 0.01, 100),
    ("DIS", "The Walt Disney Company", _STK, 1, 0.01, 100),
    ("UBER", "Uber Technologies Inc.", _STK, 1, 0.01, 100),
    ("SPOT", "Spotify Technology S.A.", _STK, 1, 0.01, 100),
    ("ZOOM", "Zoom Video Communications", _STK, 1, 0.01, 100),
    ("SQ", "Block Inc.", _STK, 1, 0.01, 100),
    ("SHOP", "Shopify Inc.", _STK, 1, 0.01, 100),

    # Banking & Finance
    ("JPM", "JPMorgan Chase & Co.", _STK, 1, 0.01, 100),
    ("BAC", "Bank of America Corp.", _STK, 1, 0.01, 100),
    ("WFC", "Wells Fargo & Company", _STK, 1, 0.01, 100),
    ("GS", "Goldman Sachs Group Inc.", _STK, 1, 0.01, 100),
    ("MS", "Morgan Stanley", _STK, 1, 0.01, 100),
    ("V", "Visa Inc.", _STK, 1, 0.01, 100),
    ("MA", "Mastercard Inc.", _STK, 1, 0.01, 100),

    # Healthcare & Pharma
    ("JNJ", "Johnson & Johnson", _STK, 1, 0.01, 100),
    ("PFE", "Pfizer Inc.", _STK, 1, 0.01, 100),
    ("MRNA", "Moderna Inc.", _STK, 1, 0.01, 100),
    ("ABBV", "AbbVie Inc.", _STK, 1, 0.01, 100),

    # Indices
    ("SPX500", "S&P 500 Index", _IDX, 25, 0.25, 50),
    ("NAS100", "NASDAQ 100 Index", _IDX, 20, 0.25, 20),
    ("DJI30", "Dow Jones Industrial Average", _IDX, 5, 1, 5),
    ("UK100", "FTSE 100 Index", _IDX, 10, 0.5, 10),
    ("GER40", "DAX 40 Index", _IDX, 25, 0.5, 25),
    ("FRA40", "CAC 40 Index", _IDX, 10, 0.5, 10),
    ("JPN225", "Nikkei 225 Index", _IDX, 5, 5, 5),
    ("AUS200", "ASX 200 Index", _IDX, 25, 1, 25),
    ("HK50", "Hang Seng Index", _IDX, 10, 1, 10),

    # Cryptocurrencies
    ("BTC/USD", "Bitcoin / US Dollar", _CRYPTO, 1, 1, 1),
    ("ETH/USD", "Ethereum / US Dollar", _CRYPTO, 1, 0.01, 1),
    ("LTC/USD", "Litecoin / US Dollar", _CRYPTO, 1, 0.01, 1),
    ("XRP/USD", "Ripple / US Dollar", _CRYPTO, 1, 0.0001, 1),
    ("ADA/USD", "Cardano / US Dollar", _CRYPTO, 1, 0.0001, 1),
    ("DOT/USD", "Polkadot / US Dollar", _CRYPTO, 1, 0.001, 1),
    ("LINK/USD", "Chainlink / US Dollar", _CRYPTO, 1, 0.001, 1),
    ("BCH/USD", "Bitcoin Cash / US Dollar", _CRYPTO, 1, 0.01, 1),
    ("BNB/USD", "Binance Coin / US Dollar", _CRYPTO, 1, 0.01, 1),
    ("SOL/USD", "Solana / US Dollar", _CRYPTO, 1, 0.001, 1),
]


def _build_registry() -> Mapping[str, InstrumentSpec]:
    registry: dict[str, InstrumentSpec] = {}
    for symbol, name, category, pip_value, pip_size, contract_size in _SPECS:
        registry[symbol.upper()] = InstrumentSpec(
            symbol=symbol,
            name=name,
            category=category,
            pip_value=pip_value,
            pip_size=pip_size,
            contract_size=contract_size,
        )
    return MappingProxyType(registry)


INSTRUMENTS: Mapping[str, InstrumentSpec] = _build_registry()


def find_instrument(symbol: str) -> InstrumentSpec | None:
    """Case-insensitive lookup; ``None`` for unknown symbols."""
    if not symbol:
        return None
    return INSTRUMENTS.get(symbol.strip().upper())


def get_instrument(symbol: str) -> InstrumentSpec:
    """Case-insensitive lookup.

    Raises
    ------
    UnknownInstrumentError
        If *symbol* is not in the registry.
    """
    spec = find_instrument(symbol)
    if spec is None:
        raise UnknownInstrumentError(symbol)
    return spec


def list_instruments(
    category: InstrumentCategory | str | None = None,
    search: str | None = None,
) -> list[InstrumentSpec]:
    """Filter the registry the way the instrument picker does.

    Parameters
    ----------
    category:
        Keep only this category. ``None`` or ``"All"`` keeps everything.
    search:
        Case-insensitive substring matched against symbol and name.

    Returns
    -------
    list of :class:`InstrumentSpec` in table order.
    """
    wanted: InstrumentCategory | None = None
    if isinstance(category, InstrumentCategory):
        wanted = category
    elif category and category.strip().lower() != "all":
        wanted = InstrumentCategory(category.strip().capitalize())

    needle = (search or "").strip().lower()
    result: list[InstrumentSpec] = []
    for spec in INSTRUMENTS.values():
        if wanted is not None and spec.category != wanted:
            continue
        if needle and needle not in spec.symbol.lower() and needle not in spec.name.lower():
            continue
        result.append(spec)
    return result


def categories() -> list[InstrumentCategory]:
    """Categories present in the registry, in table order."""
    seen: list[InstrumentCategory] = []
    for spec in INSTRUMENTS.values():
        if spec.category not in seen:
            seen.append(spec.category)
    return seen
