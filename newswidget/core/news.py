"""Remote news feed retrieval and item selection."""

from __future__ import annotations

import base64
import json
import logging
import platform as _runtime
from typing import Any

import requests

from newswidget.core import db
from newswidget.core.settings import Settings
from newswidget.core.util import scrub_hash, shyphenate
from newswidget.core.version import VERSION, satisfies

logger = logging.getLogger(__name__)

DEFAULT_TYPE = "information"
ERROR_TITLE = "Unable to fetch news!"
EPOCH = "0000-01-01 00:00:00"


class NewsFeedError(Exception):
    """Base class for news feed failures."""


class FeedConnectionError(NewsFeedError):
    """The feed could not be reached or answered with a non-2xx status."""


class FeedParseError(NewsFeedError):
    """The feed body is not a JSON array of items."""


def build_parameters(host: str, settings: Settings) -> dict[str, str]:
    """Return the installation details reported to the feed."""
    platform = db.platform(settings.database_url)
    return {
        "v": VERSION,
        "python": _runtime.python_version(),
        "db_driver": platform["driver_name"],
        "db_version": platform["server_version"],
        "host": host,
        "name": settings.site_name,
        "env": settings.app_env,
    }


def encode_parameters(params: dict[str, Any]) -> str:
    payload = json.dumps(params, sort_keys=True, separators=(",", ":"))
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def request_options(params: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """Return keyword arguments for ``requests.get``."""
    options: dict[str, Any] = {
        "timeout": settings.news_timeout,
        "params": {"hash": encode_parameters(params)},
        "headers": {"Accept": "application/json"},
        "verify": settings.news_verify_ssl,
    }
    if settings.news_proxy:
        options["proxies"] = {"http": settings.news_proxy, "https": settings.news_proxy}
    return options


def fetch_feed(source: str, options: dict[str, Any]) -> str:
    """GET the feed body, raising FeedConnectionError on any transport failure."""
    try:
        response = requests.get(source, **options)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FeedConnectionError(scrub_hash(str(exc))) from exc
    return response.text


def parse_feed(text: str) -> list[dict[str, Any]]:
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise FeedParseError(str(exc)) from exc
    if not isinstance(payload, list):
        raise FeedParseError(f"expected a JSON array, got {type(payload).__name__}")
    return [item for item in payload if isinstance(item, dict)]


def select_items(
    items: list[dict[str, Any]], current: str | None = None
) -> dict[str, dict[str, Any]]:
    """Pick the first applicable item of each type, in feed order."""
    current = current or VERSION
    news: dict[str, dict[str, Any]] = {}
    for item in items:
        item_type = item.get("type")
        if item_type is None:
            item_type = DEFAULT_TYPE
        elif not isinstance(item_type, str):
            logger.debug("Skipping feed item with malformed type %r", item_type)
            continue
        if item_type in news:
            continue
        if satisfies(item.get("target_version"), current):
            news[item_type] = item
    return news


def error_item(content: str) -> dict[str, Any]:
    return {
        "type": "error",
        "fieldValues": {
            "title": ERROR_TITLE,
            "content": content,
            "link": None,
        },
        "modifiedAt": EPOCH,
    }


def get_news(source: str, options: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Fetch, parse and select feed items.

    Never raises: a connection failure or a feed without applicable items
    yields ``{"error": <item>}`` instead.
    """
    try:
        body = fetch_feed(source, options)
    except FeedConnectionError as exc:
        logger.warning("News feed %s unreachable: %s", source, exc)
        return {
            "error": error_item(
                f"<p>Unable to connect to {source}</p><small>{shyphenate(str(exc))} </small>"
            )
        }

    try:
        items = parse_feed(body)
    except FeedParseError as exc:
        logger.warning("News feed %s returned invalid JSON: %s", source, exc)
        items = []

    news = select_items(items)
    if news:
        logger.debug("Selected news item types: %s", ", ".join(sorted(news)))
        return news

    return {"error": error_item(f"<p>Unable to parse JSON from {source}</p>")}
