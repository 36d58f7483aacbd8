import sys
from pathlib import Path

import pytest


# Ensure the package is importable without installation when running tests locally
pkg_src = Path(__file__).resolve().parents[1] / "src"
if str(pkg_src) not in sys.path:
    sys.path.insert(0, str(pkg_src))

from compound_yield_lab.core import PoolRegistry  # noqa: E402

NAVI_TYPE = "0xnavi::vault::AutoCompoundingEvent"
CETUS_TYPE = "0xcetus::vault::AutoCompoundingEvent"


@pytest.fixture
def registry() -> PoolRegistry:
    """Pool registry matching the records in ``fixtures/events.json``."""

    return PoolRegistry.from_mapping(
        {
            "NAVI-USDC": {
                "investor_id": "0xinv_navi_usdc",
                "auto_compounding_event_type": NAVI_TYPE,
                "protocol": "navi",
            },
            "NAVI-VSUI": {
                "investor_id": "0xinv_navi_vsui",
                "auto_compounding_event_type": NAVI_TYPE,
                "protocol": "navi",
            },
            "CETUS-SUI-USDC": {
                "investor_id": "0xinv_cetus_sui_usdc",
                "auto_compounding_event_type": CETUS_TYPE,
                "protocol": "cetus",
            },
            "BUCKET-BUCK": {
                "investor_id": "0xinv_bucket_buck",
                "auto_compounding_event_type": "",
                "protocol": "bucket",
            },
        }
    )
