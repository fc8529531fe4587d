# cfpick/extract.py
import logging
import re
from typing import Iterable, Sequence

from bs4 import BeautifulSoup

from .models import Carrier, CarrierMap

logger = logging.getLogger(__name__)

# leading zeros pass ("01.2.3.4"), same as the published snapshots
IPV4_RE = re.compile(r"(\d{1,3}\.){3}\d{1,3}", re.ASCII)

# first match wins
CARRIER_RULES: tuple[tuple[Carrier, str, re.Pattern], ...] = (
    (Carrier.MOBILE,  "移动", re.compile(r"CMCC", re.I)),
    (Carrier.UNICOM,  "联通", re.compile(r"CUCC|UNICOM", re.I)),
    (Carrier.TELECOM, "电信", re.compile(r"CTCC|TELECOM", re.I)),
)


def norm_carrier(label: str | None) -> Carrier | None:
    t = (label or "").strip()
    if not t:
        return None
    for carrier, marker, code_re in CARRIER_RULES:
        if marker in t or code_re.search(t):
            return carrier
    return None


def is_ipv4(ip: str | None) -> bool:
    if not ip or not IPV4_RE.fullmatch(ip):
        return False
    return all(0 <= int(x) <= 255 for x in ip.split("."))


def row_to_pair(cols: Sequence[str]) -> tuple[Carrier, str] | None:
    """
    One table row -> (carrier, ip), or None for rows that don't qualify.
    Expected layout is "line | ip | ..." but the ip column is searched for.
    """
    if not cols:
        return None
    carrier = norm_carrier(cols[0])
    ip = next((c for c in cols if is_ipv4(c)), None)
    if ip is None:
        ip = cols[1] if len(cols) > 1 else ""
    if carrier is None or not is_ipv4(ip):
        return None
    return carrier, ip


def rows_to_carrier_map(rows: Iterable[Sequence[str]]) -> CarrierMap:
    out: CarrierMap = {}
    skipped = 0
    for cols in rows:
        pair = row_to_pair(cols)
        if pair is None:
            skipped += 1
            continue
        carrier, ip = pair
        out.setdefault(carrier, []).append(ip)
    if skipped:
        logger.debug("rows skipped: %d", skipped)
    return out


def count_ips(cmap: CarrierMap) -> int:
    return sum(len(v) for v in cmap.values())


def rows_from_html(html: str, selector: str = "table tbody tr") -> list[list[str]]:
    soup = BeautifulSoup(html or "", "html.parser")
    rows: list[list[str]] = []
    for tr in soup.select(selector):
        rows.append([td.get_text(strip=True) for td in tr.find_all("td")])
    return rows
