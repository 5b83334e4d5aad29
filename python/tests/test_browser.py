import pytest

from amazon_search import browser
from amazon_search.conditions import parse_condition

RAW_ITEMS = [
    {
        "title": "Cheap cable",
        "price": "$8.00",
        "link": "https://www.amazon.com/Cheap/dp/B000CHEAP1/ref=sr_1_2?k=cable",
        "ratingText": "4.1 out of 5 stars",
    },
    {
        "title": "Best cable",
        "price": "$9.50",
        "link": "https://www.amazon.com/gp/product/B000BEST01?th=1",
        "ratingText": "4.9 out of 5 stars",
    },
    {
        "title": "Sponsored cable",
        "price": "$7.00",
        "link": "https://www.amazon.com/sspa/click?ie=UTF8&url=%2Fdp%2FB000SPONS1",
        "ratingText": "5.0 out of 5 stars",
    },
    {
        "title": "Pricey cable",
        "price": "$40.00",
        "link": "https://www.amazon.com/dp/B000PRICEY",
        "ratingText": "5.0 out of 5 stars",
    },
]


def test_search_submits_term_and_ranks_results(fake_page_factory):
    page = fake_page_factory(raw_items=RAW_ITEMS)

    results = browser.search_amazon(page, "usb c cable", parse_condition("20<"))

    assert [name for name, *_ in page.calls] == [
        "goto",
        "wait_for_selector",
        "fill",
        "expect_navigation",
        "click",
        "evaluate",
    ]
    assert ("fill", browser.SEARCH_BOX_SELECTOR, "usb c cable") in page.calls
    assert [item.title for item in results] == ["Best cable", "Cheap cable"]
    assert [item.link for item in results] == [
        "https://www.amazon.com/dp/B000BEST01",
        "https://www.amazon.com/dp/B000CHEAP1",
    ]


def test_search_respects_limit(fake_page_factory):
    page = fake_page_factory(raw_items=RAW_ITEMS)
    results = browser.search_amazon(page, "cable", parse_condition("100<"), limit=1)
    assert [item.title for item in results] == ["Pricey cable"]


def test_navigation_failure_propagates(fake_page_factory):
    page = fake_page_factory(fail_on="wait_for_selector")
    with pytest.raises(TimeoutError):
        browser.search_amazon(page, "cable", parse_condition("20<"))


class FakeContext:
    def __init__(self, page):
        self.page = page
        self.closed = False

    def new_page(self):
        return self.page

    def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page):
        self.context = FakeContext(page)
        self.closed = False

    def new_context(self, **kwargs):
        return self.context

    def close(self):
        self.closed = True


class FakePlaywright:
    def __init__(self, page):
        self.launched = []
        self.browser = FakeBrowser(page)
        self.chromium = self

    def launch(self, headless):
        self.launched.append(headless)
        return self.browser

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.mark.parametrize("fail_on", [None, "goto"])
def test_run_search_always_releases_browser(monkeypatch, fake_page_factory, fail_on):
    page = fake_page_factory(raw_items=RAW_ITEMS, fail_on=fail_on)
    playwright = FakePlaywright(page)
    monkeypatch.setattr(browser, "sync_playwright", lambda: playwright)

    if fail_on:
        with pytest.raises(TimeoutError):
            browser.run_search("cable", parse_condition("20<"), headless=True)
    else:
        results = browser.run_search("cable", parse_condition("20<"), headless=True)
        assert len(results) == 2

    assert playwright.launched == [True]
    assert page.closed
    assert playwright.browser.context.closed
    assert playwright.browser.closed
