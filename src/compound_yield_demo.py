from __future__ import annotations

import asyncio
import logging
import os
import sys
import tomllib
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, cast

import pandas as pd

from compound_yield_lab import (
    AprPipeline,
    GraphQLEventSource,
    JSONEventSource,
    PoolRegistry,
    Visualizer,
    write_apr_report,
)
from compound_yield_lab.sources import EventSource

logger = logging.getLogger(__name__)


def load_config(path: str | Path | None) -> dict[str, Any]:
    """Load configuration from a TOML file and merge with defaults.

    Parameters
    ----------
    path:
        Optional path to a configuration file. When ``None`` or missing, the
        built-in defaults are used.

    Returns
    -------
    dict[str, Any]
        Configuration dictionary with any file overrides applied.
    """

    default: dict[str, Any] = {
        "events": {
            "source": "json",
            "path": str(Path(__file__).with_name("sample_events.json")),
            "url": None,
            "cache_dir": None,
            "page_size": 50,
        },
        "window": {"days": 7, "start_time": None, "end_time": None},
        "query": {"pool_names": None},
        "pools": {},
        "output": {"outdir": None, "show": True, "charts": ["bar"]},
    }

    cfg_path = Path(path) if path else None

    if cfg_path and cfg_path.is_file():
        with open(cfg_path, "rb") as f:
            file_cfg = tomllib.load(f)

        for k, v in file_cfg.items():
            if isinstance(v, dict) and k in default and isinstance(default[k], dict):
                cast(dict, default[k]).update(v)
            else:
                default[k] = v
    elif cfg_path:
        logger.warning("Config file not found at %s. Using defaults.", cfg_path)

    return default


def resolve_window(window: dict[str, Any], now: datetime | None = None) -> tuple[int, int]:
    """Return ``(start_time, end_time)`` in epoch milliseconds.

    Explicit bounds win; otherwise the window ends at ``now`` and spans
    ``days`` days.
    """

    now = now or datetime.now(tz=UTC)
    end_time = window.get("end_time")
    if end_time is None:
        end_time = int(now.timestamp() * 1000)
    start_time = window.get("start_time")
    if start_time is None:
        days = float(window.get("days", 7))
        start_time = int(end_time) - int(timedelta(days=days).total_seconds() * 1000)
    return int(start_time), int(end_time)


def build_source(events_cfg: dict[str, Any]) -> EventSource:
    kind = str(events_cfg.get("source", "json")).lower()
    if kind == "json":
        return JSONEventSource(str(events_cfg["path"]))
    if kind == "graphql":
        url = events_cfg.get("url")
        if not url:
            raise ValueError("events.url is required for the graphql source")
        return GraphQLEventSource(
            str(url),
            page_size=int(events_cfg.get("page_size", 50)),
            cache_dir=events_cfg.get("cache_dir") or None,
        )
    raise ValueError(f"unknown event source: {kind!r}")


def main() -> None:
    """Run the demo using configuration from file or environment variables."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cfg_file = os.getenv("COMPOUND_YIELD_CONFIG") or (sys.argv[1] if len(sys.argv) > 1 else None)
    cfg = load_config(cfg_file)

    if events_env := os.getenv("COMPOUND_YIELD_EVENTS"):
        cfg.setdefault("events", {}).update({"source": "json", "path": events_env})
    if outdir_env := os.getenv("COMPOUND_YIELD_OUTDIR"):
        cfg.setdefault("output", {})["outdir"] = outdir_env
    if days_env := os.getenv("COMPOUND_YIELD_WINDOW_DAYS"):
        try:
            cfg.setdefault("window", {})["days"] = float(days_env)
        except ValueError:
            logger.warning("Ignoring non-numeric COMPOUND_YIELD_WINDOW_DAYS=%r", days_env)

    registry = PoolRegistry.from_mapping(cfg.get("pools", {}))
    if not len(registry):
        logger.warning("No pools configured; nothing to report.")
        return

    start_time, end_time = resolve_window(cfg.get("window", {}))
    pool_names = cfg.get("query", {}).get("pool_names") or None

    pipeline = AprPipeline(build_source(cfg.get("events", {})), registry)
    report = asyncio.run(
        pipeline.run_report(pool_names, start_time=start_time, end_time=end_time)
    )

    if report.empty:
        print("No compounding events in the requested window.")
        return

    pretty = report.assign(apr=report["apr"].round(2))
    with pd.option_context("display.width", 120):
        print(pretty.to_string(index=False))

    out = cfg.get("output", {})
    outdir = Path(out["outdir"]) if out.get("outdir") else None
    show = bool(out.get("show", True)) if not outdir else False

    if outdir:
        path = write_apr_report(report, outdir)
        print(f"Report written to {path}")
    if "bar" in out.get("charts", []):
        Visualizer.bar_pool_apr(
            report,
            title="APR per pool",
            save_path=str(outdir / "bar_pool_apr.png") if outdir else None,
            show=show,
        )


if __name__ == "__main__":
    main()
