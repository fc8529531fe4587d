import pytest

from cfpick.models import Settings, Source


class FakeFetcher:
    """Stands in for the browser: url -> list of rows, or an exception to raise."""

    def __init__(self, pages: dict):
        self.pages = pages
        self.calls: list[str] = []

    async def fetch_rows(self, url, timeout_ms, *, selector="table tbody tr"):
        self.calls.append(url)
        page = self.pages[url]
        if isinstance(page, BaseException):
            raise page
        return [list(r) for r in page]


def make_source(name: str, **kw) -> Source:
    kw.setdefault("timeout_ms", 1000)
    kw.setdefault("retry_delay_s", 0)
    return Source(name=name, url=f"https://{name.lower()}.test/", **kw)


@pytest.fixture
def sources():
    return make_source("A"), make_source("B")


@pytest.fixture
def settings(sources, tmp_path):
    return Settings(sources=sources, output=str(tmp_path / "out" / "cf_ips"))
