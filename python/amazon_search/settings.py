from __future__ import annotations

import logging
import os


def env_int(name: str, default: int, *, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def parse_bool_flag(raw_value: str | None, default: bool) -> bool:
    if raw_value is None:
        return default
    return raw_value not in {"0", "false", "False", "no", "off"}


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

HEADLESS = parse_bool_flag(os.getenv("PLAYWRIGHT_HEADLESS"), True)
NAV_TIMEOUT_MS = env_int("NAV_TIMEOUT_MS", 35000, min_value=10000, max_value=60000)
WAIT_FOR_SELECTOR_TIMEOUT_MS = env_int("WAIT_FOR_SELECTOR_TIMEOUT_MS", 12000, min_value=2000, max_value=30000)
RATE_LIMIT_PER_MINUTE = env_int("RATE_LIMIT_PER_MINUTE", 30, min_value=1, max_value=120)
RATE_LIMIT_WINDOW_SEC = 60
MAX_QUERY_LENGTH = env_int("MAX_QUERY_LENGTH", 120, min_value=10, max_value=300)
TRUST_PROXY = parse_bool_flag(os.getenv("TRUST_PROXY"), False)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
