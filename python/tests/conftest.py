import pytest

from amazon_search.models import RawListing


def make_listing(index: int, price: float, rating, link: str | None = None) -> RawListing:
    return RawListing(
        title=f"Product {index}",
        price_text=f"${price:.2f}",
        link=link or f"https://www.amazon.com/Product-{index}/dp/B0000000{index:02d}/ref=sr_1_{index}?keywords=x",
        rating=rating,
    )


@pytest.fixture()
def seven_listings():
    prices = [10, 12, 15, 18, 22, 25, 30]
    ratings = [5, 4.8, 4.5, 3, 4.9, 2, 4.1]
    return [
        make_listing(index, price, rating)
        for index, (price, rating) in enumerate(zip(prices, ratings), start=1)
    ]


class FakePage:
    """Records the calls a search makes and hands back canned DOM data."""

    def __init__(self, raw_items=None, fail_on=None):
        self.raw_items = raw_items or []
        self.fail_on = fail_on
        self.calls = []
        self.closed = False

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_on == name:
            raise TimeoutError(f"{name} timed out")

    def goto(self, url, **kwargs):
        self._record("goto", url)

    def wait_for_selector(self, selector, **kwargs):
        self._record("wait_for_selector", selector)

    def fill(self, selector, value):
        self._record("fill", selector, value)

    def click(self, selector):
        self._record("click", selector)

    def expect_navigation(self, **kwargs):
        page = self

        class _Navigation:
            def __enter__(self_inner):
                page._record("expect_navigation")
                return self_inner

            def __exit__(self_inner, *exc):
                return False

        return _Navigation()

    def evaluate(self, script, arg=None):
        self._record("evaluate", arg)
        return self.raw_items

    def close(self):
        self.closed = True


@pytest.fixture()
def fake_page_factory():
    return FakePage
