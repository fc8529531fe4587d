# cfpick/snapshot.py
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from .errors import ThresholdError
from .models import DEFAULT_ORDER, Carrier, MergedResult


def utc_stamp(now: datetime | None = None) -> str:
    """ISO-8601 in UTC with milliseconds and a Z suffix, e.g. 2025-01-02T03:04:05.678Z."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def total_in_order(result: MergedResult, order: Sequence[Carrier] = DEFAULT_ORDER) -> int:
    return sum(len(result.get(c)) for c in order)


def check_total(result: MergedResult, min_total: int, order: Sequence[Carrier] = DEFAULT_ORDER) -> int:
    total = total_in_order(result, order)
    if total < min_total:
        raise ThresholdError(total, min_total)
    return total


def format_snapshot(result: MergedResult, order: Sequence[Carrier] = DEFAULT_ORDER,
                    now: datetime | None = None) -> str:
    lines = [f"# Updated (UTC): {utc_stamp(now)}", ""]
    for carrier in order:
        ips = result.get(carrier)
        lines.append(f"## {carrier.value} ({len(ips)})")
        lines.extend(ips)
        lines.append("")
    return "\n".join(lines)


def write_snapshot(path: str, text: str) -> Path:
    p = Path(path)
    if str(p.parent) not in ("", "."):
        p.parent.mkdir(parents=True, exist_ok=True)
    # whole-file replace; validation already happened
    p.write_text(text, encoding="utf-8")
    return p
