from __future__ import annotations

import json
from dataclasses import asdict
from typing import List, Optional, Sequence

from .models import Listing

SEPARATOR = "-" * 34
NO_RESULTS_MESSAGE = "No products found matching the criteria."


def format_rating(rating: Optional[float]) -> str:
    if rating is None:
        return "n/a stars"
    return f"{rating:g} stars"


def render_report(results: Sequence[Listing]) -> str:
    if not results:
        return NO_RESULTS_MESSAGE

    lines: List[str] = []
    for index, listing in enumerate(results, start=1):
        lines.extend([
            f"Item {index}:",
            f"Title: {listing.title}",
            f"Price: {listing.price_text}",
            f"Rating: {format_rating(listing.rating)}",
            f"Link: {listing.link}",
            SEPARATOR,
        ])
    return "\n".join(lines)


def render_json(results: Sequence[Listing]) -> str:
    return json.dumps({"results": [asdict(listing) for listing in results]}, indent=2)
