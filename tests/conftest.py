"""
In-memory stand-ins for a Playwright ``Page`` and a Crawlee
``PlaywrightCrawlingContext``.  Every awaited call is recorded in
``calls`` so tests can assert on ordering.
"""

import json
from pathlib import Path
from types import SimpleNamespace

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeout


class FakeBrowserContext:
    def __init__(self, calls):
        self.calls = calls
        self.cookies = []

    async def add_cookies(self, cookies):
        self.calls.append(("add_cookies", cookies))
        self.cookies.extend(cookies)


class FakePage:
    """Records calls; ``evaluate`` returns ``text``.

    ``selector_appears=False`` makes both selector waits time out.
    ``login_completes=False`` makes ``wait_for_url`` time out.
    """

    def __init__(self, title="Page", text="body text",
                 selector_appears=True, login_completes=True):
        self.calls = []
        self.context = FakeBrowserContext(self.calls)
        self._title = title
        self._text = text
        self._selector_appears = selector_appears
        self._login_completes = login_completes

    async def title(self):
        self.calls.append(("title",))
        return self._title

    async def evaluate(self, script, arg=None):
        self.calls.append(("evaluate", script, arg))
        return self._text

    async def wait_for_function(self, script, arg=None, timeout=None):
        self.calls.append(("wait_for_function", script, arg, timeout))
        if not self._selector_appears:
            raise PlaywrightTimeout(f"Timeout {timeout}ms exceeded.")

    async def wait_for_selector(self, selector, timeout=None):
        self.calls.append(("wait_for_selector", selector, timeout))
        if not self._selector_appears:
            raise PlaywrightTimeout(f"Timeout {timeout}ms exceeded.")

    async def wait_for_url(self, url, timeout=None):
        self.calls.append(("wait_for_url", url, timeout))
        if not self._login_completes:
            raise PlaywrightTimeout(f"Timeout {timeout}ms exceeded.")

    async def wait_for_timeout(self, timeout):
        self.calls.append(("wait_for_timeout", timeout))

    def call_names(self):
        return [c[0] for c in self.calls]


class FakeDataset:
    """Stands in for ``crawlee.storages.Dataset``."""

    def __init__(self, calls):
        self.calls = calls
        self.pushed = []

    async def push_data(self, data):
        self.calls.append(("push_data", data))
        self.pushed.append(data)


class FakeCrawlingContext:
    """Just the slice of ``PlaywrightCrawlingContext`` the handler touches."""

    def __init__(self, page, loaded_url, url=None):
        self.page = page
        self.request = SimpleNamespace(url=url or loaded_url, loaded_url=loaded_url)
        self.dataset = FakeDataset(page.calls)
        self.pushed = self.dataset.pushed
        self.added = []

    async def push_data(self, data):
        raise AssertionError("records must be written to the dataset directly")

    async def add_requests(self, requests):
        self.page.calls.append(("add_requests", list(requests)))
        self.added.extend(requests)


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def dataset_dir(tmp_path):
    path = tmp_path / "storage" / "datasets" / "default"
    path.mkdir(parents=True)
    return path


def write_dataset(dataset_dir: Path, records):
    """Lay records out the way Crawlee's file-system storage does."""
    for i, record in enumerate(records, 1):
        (dataset_dir / f"{i:09d}.json").write_text(json.dumps(record), encoding="utf-8")
    (dataset_dir / "__metadata__.json").write_text(
        json.dumps({"id": "default", "item_count": len(records)}), encoding="utf-8",
    )


@pytest.fixture
def make_dataset(dataset_dir):
    def _make(records):
        write_dataset(dataset_dir, records)
        return dataset_dir
    return _make


@pytest.fixture
def page_factory():
    return FakePage


@pytest.fixture
def context_factory():
    return FakeCrawlingContext
