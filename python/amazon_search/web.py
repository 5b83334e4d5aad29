from __future__ import annotations

import logging
import os
import re
import threading
import time
from collections import deque
from dataclasses import asdict
from typing import Dict

from flask import Flask, Response, jsonify, request

from . import browser
from .cli import INVALID_CONDITION_MESSAGE
from .conditions import is_valid_condition, parse_condition
from .settings import (
    MAX_QUERY_LENGTH,
    RATE_LIMIT_PER_MINUTE,
    RATE_LIMIT_WINDOW_SEC,
    TRUST_PROXY,
    configure_logging,
    env_int,
)

app = Flask(__name__)
logger = logging.getLogger("amazon_search.web")

START_TIME = time.time()

_rate_limit_lock = threading.Lock()
_rate_limit_hits: Dict[str, deque[float]] = {}


def client_ip() -> str:
    if TRUST_PROXY:
        forwarded = request.headers.get("X-Forwarded-For", "")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _drop_expired(now: float) -> None:
    for ip in list(_rate_limit_hits):
        window = _rate_limit_hits[ip]
        while window and (now - window[0]) > RATE_LIMIT_WINDOW_SEC:
            window.popleft()
        if not window:
            del _rate_limit_hits[ip]


def is_rate_limited(ip: str) -> bool:
    now = time.time()
    with _rate_limit_lock:
        _drop_expired(now)
        window = _rate_limit_hits.setdefault(ip, deque())
        if len(window) >= RATE_LIMIT_PER_MINUTE:
            return True
        window.append(now)
    return False


def tracked_clients() -> int:
    with _rate_limit_lock:
        return len(_rate_limit_hits)


def reset_rate_limits() -> None:
    with _rate_limit_lock:
        _rate_limit_hits.clear()


def normalize_query(raw: str) -> str:
    normalized = re.sub(r"\s+", " ", raw).strip()
    return normalized[:MAX_QUERY_LENGTH]


@app.after_request
def add_security_headers(response):
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Cross-Origin-Resource-Policy", "same-site")
    return response


@app.route("/api/search")
def api_search():
    query = normalize_query(request.args.get("q") or "")
    raw_condition = (request.args.get("condition") or "").strip()

    if not query:
        return jsonify({"error": "Query is required"}), 400
    if not is_valid_condition(raw_condition):
        return jsonify({"error": INVALID_CONDITION_MESSAGE}), 400
    if is_rate_limited(client_ip()):
        return jsonify({"error": "Rate limit exceeded. Try again shortly."}), 429

    condition = parse_condition(raw_condition)
    try:
        results = browser.run_search(query, condition)
    except Exception:
        logger.exception("search failed for %r", query)
        return jsonify({"error": "Search failed"}), 502
    return jsonify({"results": [asdict(listing) for listing in results]})


@app.route("/health")
def health():
    return {
        "status": "ok",
        "uptime_sec": int(time.time() - START_TIME),
    }


@app.route("/robots.txt")
def robots():
    lines = [
        "User-agent: *",
        "Disallow: /api/search",
    ]
    return Response("\n".join(lines), mimetype="text/plain")


def serve() -> None:
    configure_logging()
    host = os.getenv("APP_HOST", "0.0.0.0")
    port = env_int("PORT", 5000, min_value=1, max_value=65535)
    debug = os.getenv("APP_DEBUG", "0") == "1"
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    serve()
