"""Search Amazon, filter by a price condition and list the best-rated matches."""

from .conditions import InvalidConditionError, evaluate, is_valid_condition, parse_condition
from .links import simplify_link
from .models import GREATER_THAN, LESS_THAN, TOP_N, Listing, PriceCondition, RawListing
from .pipeline import rank_listings

__all__ = [
    "GREATER_THAN",
    "InvalidConditionError",
    "LESS_THAN",
    "Listing",
    "PriceCondition",
    "RawListing",
    "TOP_N",
    "evaluate",
    "is_valid_condition",
    "parse_condition",
    "rank_listings",
    "simplify_link",
]
