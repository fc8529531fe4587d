# cfpick/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Carrier(str, Enum):
    # value = section name in the snapshot file
    MOBILE = "移动"
    UNICOM = "联通"
    TELECOM = "电信"


CarrierMap = dict[Carrier, list[str]]

DEFAULT_ORDER = (Carrier.MOBILE, Carrier.UNICOM, Carrier.TELECOM)


@dataclass(frozen=True)
class Source:
    name: str
    url: str
    timeout_ms: int
    retry_delay_s: float = 2.0
    attempts: int = 2
    min_ips: int = 5          # sanity floor for one source
    row_selector: str = "table tbody tr"


@dataclass(frozen=True)
class Settings:
    sources: tuple[Source, ...]
    output: str = "cloudflare优选ip"
    carriers_order: tuple[Carrier, ...] = DEFAULT_ORDER
    top_n_per_carrier: int = 0   # 0 = unlimited
    min_total_ips: int = 10
    render_mode: int = 1         # 0 = plain HTTP, 1 = headless browser


@dataclass(frozen=True)
class SourceOutcome:
    source: Source
    carrier_map: CarrierMap | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.carrier_map is not None


@dataclass
class MergedResult:
    by_carrier: CarrierMap = field(default_factory=dict)

    def get(self, carrier: Carrier) -> list[str]:
        return self.by_carrier.get(carrier, [])

    @property
    def total(self) -> int:
        return sum(len(v) for v in self.by_carrier.values())
