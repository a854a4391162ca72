"""Explicit cache entries for dashboard stats.

There is no module-level cache.  The caller holds the
:class:`StatsCacheEntry` and passes it back in; the function hands
back either that same entry or a freshly computed one.  Entries are
keyed by a content fingerprint of the trade snapshot, so any edit to
any trade invalidates them regardless of age.

Usage::

    entry = None
    entry = cached_dashboard_stats(trades, entry, now=utc_now(), ttl=60)
    render(entry.stats)
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Iterable

from zealous_journal.core.config import AnalyticsConfig
from zealous_journal.core.models import TradeRecord

from .performance import DashboardStats, compute_dashboard_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatsCacheEntry:
    key: str  # snapshot_key() of the trades the stats were computed from
    computed_at: datetime
    stats: DashboardStats


def _trade_fingerprint(trade: TradeRecord) -> str:
    payload = trade.model_dump(mode="json")
    payload["tags"] = sorted(trade.tags)
    return json.dumps(payload, sort_keys=True, default=str)


def snapshot_key(trades: Iterable[TradeRecord], *, length: int = 32) -> str:
    """Order-independent SHA256 fingerprint of a trade snapshot.

    Parameters
    ----------
    trades:
        The snapshot.  Reordering it does not change the key; changing
        any field of any trade does.
    length:
        Number of hex characters to return (default 32).
    """
    raw = "\n".join(sorted(_trade_fingerprint(t) for t in trades))
    return hashlib.sha256(raw.encode()).hexdigest()[:length]


def cached_dashboard_stats(
    trades: Iterable[TradeRecord],
    entry: StatsCacheEntry | None,
    *,
    now: datetime,
    ttl: float | timedelta,
    config: AnalyticsConfig | None = None,
    tz: tzinfo | None = None,
) -> StatsCacheEntry:
    """Reuse *entry* while it is fresh and matches *trades*, else recompute.

    *entry* is returned unchanged (same object) when its key equals the
    snapshot's key and ``now - entry.computed_at < ttl``.  *ttl* is
    seconds or a ``timedelta``; a zero ttl always recomputes.
    """
    snapshot = list(trades)
    key = snapshot_key(snapshot)
    max_age = ttl if isinstance(ttl, timedelta) else timedelta(seconds=ttl)

    if entry is not None and entry.key == key and now - entry.computed_at < max_age:
        logger.debug("Stats cache hit for %s", key)
        return entry

    logger.debug("Stats cache miss for %s (%d trades)", key, len(snapshot))
    return StatsCacheEntry(
        key=key,
        computed_at=now,
        stats=compute_dashboard_stats(snapshot, config=config, tz=tz),
    )
