from __future__ import annotations

import math
import re
from typing import Optional

from .models import GREATER_THAN, LESS_THAN, OPERATORS, PriceCondition

CONDITION_PATTERN = re.compile(r"^[0-9]+(\.[0-9]+)?[<>]$")
LEADING_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d*)?|\.\d+")
NON_PRICE_CHARS = re.compile(r"[^0-9.]")


class InvalidConditionError(ValueError):
    """Raised when a price condition cannot be parsed."""

    def __init__(self, text: object, reason: str) -> None:
        super().__init__(f"invalid price condition {text!r}: {reason}")
        self.text = text
        self.reason = reason


def leading_float(text: str) -> Optional[float]:
    """
    Reads the number at the start of ``text``, ignoring whatever follows.
    Examples:
      "4.5" -> 4.5
      "1.2.3" -> 1.2
      "." -> None
    """
    match = LEADING_NUMBER_PATTERN.match(text)
    if not match:
        return None
    return float(match.group(0))


def is_valid_condition(text: object) -> bool:
    if not isinstance(text, str):
        return False
    return CONDITION_PATTERN.fullmatch(text) is not None


def parse_condition(text: str) -> PriceCondition:
    if not isinstance(text, str) or not text:
        raise InvalidConditionError(text, "empty condition")
    operator = text[-1]
    if operator not in OPERATORS:
        raise InvalidConditionError(text, "missing trailing '<' or '>'")
    number = text[:-1]
    try:
        threshold = float(number)
    except ValueError:
        raise InvalidConditionError(text, f"{number!r} is not a number") from None
    if not math.isfinite(threshold) or threshold < 0:
        raise InvalidConditionError(text, "threshold must be a finite non-negative number")
    return PriceCondition(operator=operator, threshold=threshold)


def parse_price(price_text: str) -> Optional[float]:
    return leading_float(NON_PRICE_CHARS.sub("", price_text or ""))


def evaluate(condition: PriceCondition, price_text: str) -> bool:
    # "<" keeps prices below the threshold, ">" keeps prices above it.
    price = parse_price(price_text)
    if price is None:
        return False
    if condition.operator == LESS_THAN:
        return price < condition.threshold
    if condition.operator == GREATER_THAN:
        return price > condition.threshold
    return False
