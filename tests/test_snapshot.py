from datetime import datetime, timezone

import pytest

from cfpick.errors import ThresholdError
from cfpick.models import Carrier, MergedResult
from cfpick.snapshot import check_total, format_snapshot, utc_stamp, write_snapshot

NOW = datetime(2025, 3, 4, 5, 6, 7, 890000, tzinfo=timezone.utc)


def _result(n_mobile, n_telecom=0):
    return MergedResult({
        Carrier.MOBILE: [f"1.1.1.{i}" for i in range(n_mobile)],
        Carrier.TELECOM: [f"3.3.3.{i}" for i in range(n_telecom)],
    })


def test_utc_stamp_format():
    assert utc_stamp(NOW) == "2025-03-04T05:06:07.890Z"
    assert utc_stamp(datetime(2025, 1, 1)) == "2025-01-01T00:00:00.000Z"


def test_threshold_gate():
    with pytest.raises(ThresholdError) as ei:
        check_total(_result(9), 10)
    assert ei.value.total == 9
    assert ei.value.minimum == 10
    assert "9" in str(ei.value) and "10" in str(ei.value)
    assert check_total(_result(10), 10) == 10


def test_format_snapshot_sections_in_fixed_order():
    text = format_snapshot(_result(2, 1), now=NOW)
    assert text == "\n".join([
        "# Updated (UTC): 2025-03-04T05:06:07.890Z",
        "",
        "## 移动 (2)",
        "1.1.1.0",
        "1.1.1.1",
        "",
        "## 联通 (0)",
        "",
        "## 电信 (1)",
        "3.3.3.0",
        "",
    ])


def test_write_snapshot_replaces_existing_file(tmp_path):
    target = tmp_path / "nested" / "cf"
    write_snapshot(str(target), "old content that is longer\n")
    write_snapshot(str(target), "new\n")
    assert target.read_text(encoding="utf-8") == "new\n"
