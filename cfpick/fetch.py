# cfpick/fetch.py
import asyncio
import logging
from typing import Awaitable, Callable, Protocol, TypeVar

from .errors import SanityError
from .extract import count_ips, rows_to_carrier_map
from .models import CarrierMap, Source

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RowFetcher(Protocol):
    async def fetch_rows(self, url: str, timeout_ms: int, *, selector: str = ...) -> list[list[str]]: ...


async def retry(fn: Callable[[int], Awaitable[T]], attempts: int = 2, delay_s: float = 2.0, label: str = "") -> T:
    """
    Calls fn(attempt) until it returns, at most `attempts` times.
    The last exception is re-raised when every attempt failed.
    """
    last_err: Exception | None = None
    for i in range(1, attempts + 1):
        try:
            return await fn(i)
        except Exception as e:
            last_err = e
            logger.warning("%sRetry %d/%d failed: %s", f"{label}: " if label else "", i, attempts, e)
            if i < attempts:
                await asyncio.sleep(delay_s)
    if last_err is None:
        raise ValueError("attempts must be >= 1")
    raise last_err


async def fetch_source(source: Source, fetcher: RowFetcher) -> CarrierMap:
    async def attempt(i: int) -> CarrierMap:
        logger.debug("%s: attempt %d -> %s", source.name, i, source.url)
        rows = await fetcher.fetch_rows(source.url, source.timeout_ms, selector=source.row_selector)
        cmap = rows_to_carrier_map(rows)
        count = count_ips(cmap)
        # too few usually means the table only half rendered
        if count < source.min_ips:
            raise SanityError(source.name, count, source.min_ips)
        return cmap

    return await retry(attempt, source.attempts, source.retry_delay_s, label=source.name)
