#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
import argparse
import asyncio
import logging
from dataclasses import replace

from cfpick.config import load_settings
from cfpick.errors import ConfigError, SourcesFailed, ThresholdError
from cfpick.run import run

logger = logging.getLogger("cfpick")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Fetch Cloudflare preferred IPs per carrier from WeTest + HostMonit and write a snapshot file."
    )
    ap.add_argument("--config", help="YAML config (sources, output, thresholds)")
    ap.add_argument("--out", help="snapshot path (overrides config)")
    ap.add_argument("--top-n", type=int, help="keep at most N IPs per carrier, 0 = all")
    ap.add_argument("--min-total", type=int, help="refuse to write below this many IPs")
    ap.add_argument("--render-mode", type=int, choices=(0, 1), help="0 = plain HTTP, 1 = headless browser")
    ap.add_argument("--dry-run", action="store_true", help="validate and print, don't write")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        logger.error("config: %s", e)
        return 1

    overrides = {}
    if args.out: overrides["output"] = args.out
    if args.top_n is not None: overrides["top_n_per_carrier"] = args.top_n
    if args.min_total is not None: overrides["min_total_ips"] = args.min_total
    if args.render_mode is not None: overrides["render_mode"] = args.render_mode
    if overrides:
        settings = replace(settings, **overrides)

    try:
        report = asyncio.run(run(settings, dry_run=args.dry_run))
    except (SourcesFailed, ThresholdError) as e:
        logger.error("%s", e)
        return 1

    if args.dry_run:
        print(report.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
