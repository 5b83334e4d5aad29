from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional

from .conditions import evaluate
from .links import simplify_link
from .models import TOP_N, Listing, PriceCondition, RawListing


def rating_sort_key(listing: RawListing) -> float:
    rating = listing.rating
    if rating is None or math.isnan(rating):
        return -math.inf
    return rating


def filter_by_condition(listings: Iterable[RawListing], condition: PriceCondition) -> List[RawListing]:
    return [listing for listing in listings if evaluate(condition, listing.price_text)]


def sort_by_rating(listings: Iterable[RawListing]) -> List[RawListing]:
    # sorted() stays stable with reverse=True, so equal ratings keep their order.
    return sorted(listings, key=rating_sort_key, reverse=True)


def rank_listings(
    listings: Iterable[RawListing],
    condition: PriceCondition,
    *,
    limit: int = TOP_N,
    log: Optional[logging.Logger] = None,
) -> List[Listing]:
    """
    Filters listings by the price condition, orders them by rating (best
    first), swaps in canonical links, drops sponsored redirects and keeps at
    most ``limit`` entries (never more than TOP_N).
    """
    listings = list(listings)
    limit = max(0, min(limit, TOP_N))

    matching = filter_by_condition(listings, condition)
    if log is not None:
        log.info("Products found: %s", len(listings))
        log.info("Filtered products matching price condition: %s", len(matching))

    results: List[Listing] = []
    for listing in sort_by_rating(matching):
        if len(results) >= limit:
            break
        link = simplify_link(listing.link)
        if link is None:
            continue
        results.append(listing.with_link(link))
    return results
