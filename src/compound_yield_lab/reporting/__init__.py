from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

import pandas as pd

from ..core import MS_PER_DAY, CompoundingEvent, EventRepository, InvestorId, PoolRegistry

REPORT_COLUMNS = [
    "pool",
    "investor_id",
    "apr",
    "events",
    "first_timestamp",
    "last_timestamp",
    "span_days",
]


def _ensure_outdir(outdir: str | Path) -> Path:
    p = Path(outdir)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _event_stats(events: Iterable[CompoundingEvent]) -> pd.DataFrame:
    df = EventRepository(events).to_dataframe()
    if df.empty:
        return pd.DataFrame(columns=["events", "first_timestamp", "last_timestamp"])
    return df.groupby("investor_id").agg(
        events=("timestamp", "count"),
        first_timestamp=("timestamp", "min"),
        last_timestamp=("timestamp", "max"),
    )


def apr_report(
    events: Iterable[CompoundingEvent],
    investor_aprs: Mapping[InvestorId, float],
    registry: PoolRegistry,
) -> pd.DataFrame:
    """Tabulate investor APRs with their pool and event coverage.

    Investors the registry does not know keep an empty ``pool``.  Rows are
    sorted by ``apr`` descending.
    """

    if not investor_aprs:
        return pd.DataFrame(columns=REPORT_COLUMNS)

    owners = registry.investor_pool_map()
    stats = _event_stats(events)
    out = pd.DataFrame(
        {
            "investor_id": list(investor_aprs),
            "apr": [float(v) for v in investor_aprs.values()],
        }
    )
    out["pool"] = out["investor_id"].map(lambda i: owners.get(i, ""))
    out = out.merge(stats, left_on="investor_id", right_index=True, how="left")
    out["span_days"] = (out["last_timestamp"] - out["first_timestamp"]) / MS_PER_DAY
    return out[REPORT_COLUMNS].sort_values("apr", ascending=False).reset_index(drop=True)


def write_apr_report(df: pd.DataFrame, outdir: str | Path) -> Path:
    """Write ``pool_apr.csv`` into ``outdir`` and return its path."""

    path = _ensure_outdir(outdir) / "pool_apr.csv"
    df.to_csv(path, index=False)
    return path


__all__ = ["REPORT_COLUMNS", "apr_report", "write_apr_report"]
