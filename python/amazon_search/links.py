from __future__ import annotations

import re
from typing import Optional

CANONICAL_PRODUCT_URL = "https://www.amazon.com/dp/{product_id}"
SPONSORED_REDIRECT_MARKER = "/sspa/click"
PRODUCT_ID_PATTERNS = [
    re.compile(r"/dp/([A-Za-z0-9_]+)"),
    re.compile(r"/gp/product/([A-Za-z0-9_]+)"),
]


def simplify_link(url: str) -> Optional[str]:
    """
    Reduces a result link to a stable product URL.
    Examples:
      ".../dp/B08N5WRWNW/ref=sr_1_1" -> "https://www.amazon.com/dp/B08N5WRWNW"
      ".../gp/product/B01ABCDE12?th=1" -> "https://www.amazon.com/dp/B01ABCDE12"
      ".../sspa/click?..." -> None (sponsored redirect)
    Anything else keeps its path with the query string removed.
    """
    if SPONSORED_REDIRECT_MARKER in url:
        return None
    for pattern in PRODUCT_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return CANONICAL_PRODUCT_URL.format(product_id=match.group(1))
    return url.split("?", 1)[0]
