# cfpick/net.py
from __future__ import annotations

import asyncio
import logging

import aiohttp

from .errors import NavigationError, RenderTimeout
from .extract import rows_from_html

logger = logging.getLogger(__name__)

UA = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

BASE_HEADERS = {
    "User-Agent": UA,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "zh-CN,zh;q=0.9,en-US;q=0.8,en;q=0.7",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Upgrade-Insecure-Requests": "1",
}

LAUNCH_ARGS = ["--disable-blink-features=AutomationControlled", "--no-sandbox", "--disable-dev-shm-usage"]


class BrowserRowFetcher:
    """Renders the page in headless Chromium and reads the table rows."""

    def __init__(self, *, headless: bool = True):
        self.headless = headless

    async def fetch_rows(self, url: str, timeout_ms: int, *, selector: str = "table tbody tr") -> list[list[str]]:
        from playwright.async_api import async_playwright
        from playwright.async_api import Error as PlaywrightError
        from playwright.async_api import TimeoutError as PlaywrightTimeout

        async with async_playwright() as pw:
            browser = None
            page = None
            try:
                browser = await pw.chromium.launch(headless=self.headless, args=LAUNCH_ARGS)
                page = await browser.new_page(user_agent=UA, locale="zh-CN")
                # domcontentloaded, not networkidle: some sites keep long-polling open
                await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
                await page.wait_for_selector(selector, timeout=timeout_ms)
                html = await page.content()
            except PlaywrightTimeout as e:
                raise RenderTimeout(f"{url}: no '{selector}' within {timeout_ms} ms") from e
            except PlaywrightError as e:
                raise NavigationError(f"{url}: {e}") from e
            finally:
                if page is not None:
                    try: await page.close()
                    except PlaywrightError: pass
                if browser is not None:
                    try: await browser.close()
                    except PlaywrightError: pass

        rows = rows_from_html(html, selector)
        logger.debug("render %s -> %d rows", url, len(rows))
        return rows


class HttpRowFetcher:
    """Plain GET for pages that ship the table in the initial HTML."""

    async def fetch_rows(self, url: str, timeout_ms: int, *, selector: str = "table tbody tr") -> list[list[str]]:
        timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        try:
            async with aiohttp.ClientSession(timeout=timeout, headers=BASE_HEADERS) as session:
                async with session.get(url, allow_redirects=True) as r:
                    text = await r.text(errors="ignore")
                    if r.status != 200:
                        raise NavigationError(f"{url}: HTTP {r.status}")
        except asyncio.TimeoutError as e:
            raise RenderTimeout(f"{url}: no response within {timeout_ms} ms") from e
        except aiohttp.ClientError as e:
            raise NavigationError(f"{url}: {e}") from e

        rows = rows_from_html(text, selector)
        if not rows:
            raise RenderTimeout(f"{url}: no '{selector}' in static HTML")
        logger.debug("http %s -> %d rows", url, len(rows))
        return rows


def make_fetcher(render_mode: int):
    if render_mode == 0:
        return HttpRowFetcher()
    return BrowserRowFetcher()
