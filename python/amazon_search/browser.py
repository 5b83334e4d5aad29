from __future__ import annotations

import logging
from typing import List, Optional

from playwright.sync_api import sync_playwright

from .extractor import AmazonResultsExtractor, ListingExtractor
from .models import TOP_N, Listing, PriceCondition
from .pipeline import rank_listings
from .settings import HEADLESS, NAV_TIMEOUT_MS, WAIT_FOR_SELECTOR_TIMEOUT_MS

logger = logging.getLogger("amazon_search.browser")

HOME_URL = "https://www.amazon.com/"
SEARCH_BOX_SELECTOR = "#twotabsearchtextbox"
SEARCH_SUBMIT_SELECTOR = "input#nav-search-submit-button"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/121.0.0.0 Safari/537.36"
)


def search_amazon(
    page,
    search_term: str,
    condition: PriceCondition,
    *,
    extractor: Optional[ListingExtractor] = None,
    limit: Optional[int] = None,
    log: Optional[logging.Logger] = None,
) -> List[Listing]:
    log = log or logger
    extractor = extractor or AmazonResultsExtractor(log=log)

    log.info("Searching Amazon for: %s", search_term)
    page.goto(HOME_URL, wait_until="networkidle", timeout=NAV_TIMEOUT_MS)
    page.wait_for_selector(SEARCH_BOX_SELECTOR, timeout=WAIT_FOR_SELECTOR_TIMEOUT_MS)
    page.fill(SEARCH_BOX_SELECTOR, search_term)
    with page.expect_navigation(timeout=NAV_TIMEOUT_MS):
        page.click(SEARCH_SUBMIT_SELECTOR)

    listings = extractor.extract(page)
    return rank_listings(listings, condition, limit=TOP_N if limit is None else limit, log=log)


def run_search(
    search_term: str,
    condition: PriceCondition,
    *,
    headless: bool = HEADLESS,
    limit: Optional[int] = None,
) -> List[Listing]:
    """
    Runs one search in a fresh browser. Page, context and browser are closed
    however the search ends; navigation and selector errors propagate.
    """
    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=headless)
        try:
            context = browser.new_context(
                viewport={"width": 1400, "height": 900},
                locale="en-US",
                user_agent=USER_AGENT,
                extra_http_headers={"Accept-Language": "en-US,en;q=0.9"},
            )
            try:
                page = context.new_page()
                try:
                    return search_amazon(page, search_term, condition, limit=limit)
                finally:
                    page.close()
            finally:
                context.close()
        finally:
            browser.close()
