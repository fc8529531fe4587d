# cfpick/run.py
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime

from .errors import SourcesFailed
from .extract import count_ips
from .fetch import RowFetcher, fetch_source
from .merge import merge_maps, trim
from .models import MergedResult, Settings, SourceOutcome
from .net import make_fetcher
from .snapshot import check_total, format_snapshot, write_snapshot

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    outcomes: list[SourceOutcome] = field(default_factory=list)
    result: MergedResult = field(default_factory=MergedResult)
    total: int = 0
    text: str = ""
    path: str | None = None   # None when nothing was written (dry run)


async def collect(settings: Settings, fetcher: RowFetcher) -> list[SourceOutcome]:
    """Fetch every source concurrently; a failure stays local to its source."""
    results = await asyncio.gather(
        *(fetch_source(src, fetcher) for src in settings.sources),
        return_exceptions=True,
    )
    outcomes: list[SourceOutcome] = []
    for src, res in zip(settings.sources, results):
        if isinstance(res, BaseException):
            if not isinstance(res, Exception):
                raise res
            logger.warning("%s FAILED: %s", src.name, res)
            outcomes.append(SourceOutcome(src, error=res))
        else:
            logger.info("%s OK (%d IPs)", src.name, count_ips(res))
            outcomes.append(SourceOutcome(src, carrier_map=res))
    return outcomes


async def run(
    settings: Settings,
    fetcher: RowFetcher | None = None,
    *,
    now: datetime | None = None,
    dry_run: bool = False,
) -> RunReport:
    fetcher = fetcher or make_fetcher(settings.render_mode)
    report = RunReport()

    report.outcomes = await collect(settings, fetcher)
    if not any(o.ok for o in report.outcomes):
        raise SourcesFailed([o.source.name for o in report.outcomes])

    merged = merge_maps(o.carrier_map for o in report.outcomes if o.ok)
    report.result = trim(merged, settings.top_n_per_carrier)

    # raises ThresholdError before anything touches the output file
    report.total = check_total(report.result, settings.min_total_ips, settings.carriers_order)

    report.text = format_snapshot(report.result, settings.carriers_order, now)
    if dry_run:
        logger.info("dry run: %d IPs, not writing %s", report.total, settings.output)
        return report

    write_snapshot(settings.output, report.text)
    report.path = settings.output
    logger.info("Wrote %d IPs -> %s", report.total, settings.output)
    return report
