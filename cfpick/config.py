# cfpick/config.py
from __future__ import annotations

from dataclasses import replace

import yaml

from .errors import ConfigError
from .models import DEFAULT_ORDER, Carrier, Settings, Source

WETEST = Source(
    name="WeTest",
    url="https://www.wetest.vip/page/cloudflare/address_v4.html",
    timeout_ms=90_000,
    retry_delay_s=1.5,
)
# HostMonit is often slow from CI runners: shorter budget, skip on failure
HOSTMONIT = Source(
    name="HostMonit",
    url="https://stock.hostmonit.com/CloudFlareYes",
    timeout_ms=35_000,
    retry_delay_s=2.0,
)

DEFAULT_SOURCES = (WETEST, HOSTMONIT)

DEFAULT_SETTINGS = Settings(sources=DEFAULT_SOURCES)

_CARRIER_ALIASES = {
    "移动": Carrier.MOBILE, "mobile": Carrier.MOBILE, "cmcc": Carrier.MOBILE,
    "联通": Carrier.UNICOM, "unicom": Carrier.UNICOM, "cucc": Carrier.UNICOM,
    "电信": Carrier.TELECOM, "telecom": Carrier.TELECOM, "ctcc": Carrier.TELECOM,
}


def _carrier(name) -> Carrier:
    c = _CARRIER_ALIASES.get(str(name).strip().lower())
    if c is None:
        raise ConfigError(f"unknown carrier in carriers_order: {name!r}")
    return c


def _source(raw: dict, base: Source | None) -> Source:
    if not isinstance(raw, dict):
        raise ConfigError(f"source entry must be a mapping, got {type(raw).__name__}")
    if base is None and not (raw.get("name") and raw.get("url")):
        raise ConfigError("new source needs at least 'name' and 'url'")
    base = base or Source(name=raw["name"], url=raw["url"], timeout_ms=30_000)
    try:
        return replace(
            base,
            url=str(raw.get("url", base.url)),
            timeout_ms=int(raw.get("timeout_ms", base.timeout_ms)),
            retry_delay_s=float(raw.get("retry_delay_ms", base.retry_delay_s * 1000)) / 1000,
            attempts=int(raw.get("attempts", base.attempts)),
            min_ips=int(raw.get("min_ips", base.min_ips)),
            row_selector=str(raw.get("row_selector", base.row_selector)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"bad source {base.name!r}: {e}") from e


def settings_from_dict(cfg: dict | None, base: Settings = DEFAULT_SETTINGS) -> Settings:
    """Overlay a parsed YAML mapping on top of `base`."""
    cfg = cfg or {}
    if not isinstance(cfg, dict):
        raise ConfigError("config root must be a mapping")

    sources = base.sources
    if "sources" in cfg:
        known = {s.name: s for s in base.sources}
        sources = tuple(_source(r, known.get(r.get("name")) if isinstance(r, dict) else None)
                        for r in (cfg["sources"] or []))
        if len(sources) > 2:
            raise ConfigError(f"at most two sources are supported, got {len(sources)}")

    order = base.carriers_order
    if "carriers_order" in cfg:
        order = tuple(_carrier(n) for n in (cfg["carriers_order"] or []))
        if len(set(order)) != len(order):
            raise ConfigError("carriers_order lists a carrier twice")
        order = order or DEFAULT_ORDER

    output = cfg.get("output", base.output)
    if output is None or not str(output).strip():
        raise ConfigError("output path must not be empty")

    try:
        return replace(
            base,
            sources=sources,
            output=str(output),
            carriers_order=order,
            top_n_per_carrier=int(cfg.get("top_n_per_carrier", base.top_n_per_carrier)),
            min_total_ips=int(cfg.get("min_total_ips", base.min_total_ips)),
            render_mode=int(cfg.get("render_mode", base.render_mode)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"bad config value: {e}") from e


def load_settings(path: str | None) -> Settings:
    if not path:
        return DEFAULT_SETTINGS
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    return settings_from_dict(cfg)
