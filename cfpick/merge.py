# cfpick/merge.py
from typing import Hashable, Iterable, TypeVar

from .models import CarrierMap, MergedResult

H = TypeVar("H", bound=Hashable)


def uniq_keep_order(items: Iterable[H]) -> list[H]:
    seen: set = set()
    out: list[H] = []
    for x in items:
        if x not in seen:
            seen.add(x)
            out.append(x)
    return out


def merge_into(dst: CarrierMap, src: CarrierMap) -> None:
    for carrier, ips in src.items():
        dst.setdefault(carrier, []).extend(ips)


def merge_maps(maps: Iterable[CarrierMap]) -> MergedResult:
    """Concatenate per carrier in arrival order, then dedupe; first occurrence wins."""
    acc: CarrierMap = {}
    for m in maps:
        merge_into(acc, m)
    return MergedResult({carrier: uniq_keep_order(ips) for carrier, ips in acc.items()})


def trim(result: MergedResult, top_n: int) -> MergedResult:
    if top_n <= 0:
        return result
    return MergedResult({carrier: ips[:top_n] for carrier, ips in result.by_carrier.items()})
