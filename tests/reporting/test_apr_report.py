from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from compound_yield_lab.core import MS_PER_DAY, PoolRegistry, SingleAssetEvent
from compound_yield_lab.reporting import REPORT_COLUMNS, apr_report, write_apr_report

T0 = 1_717_200_000_000


def _single(investor_id: str, day: int) -> SingleAssetEvent:
    return SingleAssetEvent(
        investor_id=investor_id,
        timestamp=T0 + day * MS_PER_DAY,
        compound_amount=1,
        total_amount=100,
    )


def test_apr_report_joins_pools_and_event_coverage(registry: PoolRegistry) -> None:
    events = [
        _single("0xinv_navi_usdc", 0),
        _single("0xinv_navi_usdc", 2),
        _single("0xinv_navi_vsui", 1),
        _single("0xinv_orphan", 0),
    ]
    aprs = {"0xinv_navi_usdc": 12.5, "0xinv_navi_vsui": 0.0, "0xinv_orphan": 40.0}

    report = apr_report(events, aprs, registry)

    assert list(report.columns) == REPORT_COLUMNS
    assert list(report["investor_id"]) == ["0xinv_orphan", "0xinv_navi_usdc", "0xinv_navi_vsui"]
    assert list(report["pool"]) == ["", "NAVI-USDC", "NAVI-VSUI"]
    usdc = report.iloc[1]
    assert usdc["events"] == 2
    assert usdc["first_timestamp"] == T0
    assert usdc["span_days"] == pytest.approx(2.0)


def test_apr_report_empty(registry: PoolRegistry) -> None:
    report = apr_report([], {}, registry)
    assert report.empty
    assert list(report.columns) == REPORT_COLUMNS


def test_write_apr_report_creates_outdir(tmp_path: Path, registry: PoolRegistry) -> None:
    report = apr_report([_single("0xinv_navi_usdc", 0)], {"0xinv_navi_usdc": 0.0}, registry)
    path = write_apr_report(report, tmp_path / "out")

    assert path.name == "pool_apr.csv"
    written = pd.read_csv(path)
    assert list(written.columns) == REPORT_COLUMNS
    assert written.loc[0, "pool"] == "NAVI-USDC"
