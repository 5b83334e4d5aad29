from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

LESS_THAN = "<"
GREATER_THAN = ">"
OPERATORS = {LESS_THAN, GREATER_THAN}

# Upper bound on the number of listings a search ever reports.
TOP_N = 5


@dataclass(frozen=True)
class PriceCondition:
    """A parsed price filter.

    The operator is written after the number, so ``"20<"`` parses to
    ``PriceCondition("<", 20.0)`` and keeps prices *below* 20.
    """

    operator: str
    threshold: float


@dataclass(frozen=True)
class RawListing:
    title: str
    price_text: str
    link: str
    rating: Optional[float] = None

    def with_link(self, link: str) -> "Listing":
        return Listing(
            title=self.title,
            price_text=self.price_text,
            link=link,
            rating=self.rating,
        )


@dataclass(frozen=True)
class Listing(RawListing):
    """A listing whose link has been reduced to its canonical product URL."""

    def with_link(self, link: str) -> "Listing":
        return replace(self, link=link)
