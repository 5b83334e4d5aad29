from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from .conditions import leading_float
from .models import RawListing

logger = logging.getLogger("amazon_search.extractor")

RESULT_ITEM_SELECTOR = ".s-main-slot .s-result-item"


def parse_rating(rating_text: str) -> Optional[float]:
    """
    Reads the rating from an icon label.
    Examples:
      "4.5 out of 5 stars" -> 4.5
      "New" -> None
    """
    return leading_float((rating_text or "").strip().split(" ")[0])


def coerce_listings(
    raw_items: Iterable[Dict[str, Any]],
    *,
    log: Optional[logging.Logger] = None,
) -> List[RawListing]:
    log = log or logger
    listings: List[RawListing] = []

    for item in raw_items:
        title = (item.get("title") or "").strip()
        price_text = (item.get("price") or "").strip()
        link = (item.get("link") or "").strip()
        rating_text = (item.get("ratingText") or "").strip()

        if not title or not price_text or not link or not rating_text:
            log.info("Skipped an item due to missing elements.")
            continue

        listings.append(RawListing(
            title=title,
            price_text=price_text,
            link=link,
            rating=parse_rating(rating_text),
        ))

    return listings


class ListingExtractor(ABC):
    """Turns a rendered search results page into raw listings."""

    @abstractmethod
    def extract(self, page) -> List[RawListing]:
        raise NotImplementedError


class AmazonResultsExtractor(ListingExtractor):
    extraction_script = r"""
    (selector) => {
      const text = (node) => (node ? (node.innerText || '').trim() : null);
      return Array.from(document.querySelectorAll(selector)).map((item) => {
        const link = item.querySelector('h2 a');
        return {
          title: text(item.querySelector('h2 a span')),
          price: text(item.querySelector('.a-price .a-offscreen')),
          link: link ? link.href : null,
          ratingText: text(item.querySelector('.a-icon-alt')),
        };
      });
    }
    """

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def extract(self, page) -> List[RawListing]:
        raw_items = page.evaluate(self.extraction_script, RESULT_ITEM_SELECTOR)
        return coerce_listings(raw_items or [], log=self.log)
