"""News widget for the dashboard aside."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any

from dash import dcc, html
from flask import has_request_context, request
from flask_caching import Cache

from newswidget.core.news import ERROR_TITLE, build_parameters, get_news, request_options
from newswidget.core.settings import Settings
from newswidget.core.util import timestamp

logger = logging.getLogger(__name__)

NAME = "News Widget"
TARGET = "dashboard-aside-top"
PRIORITY = 150
ZONE = "backend"


def _fields(item: dict[str, Any]) -> tuple[str, str, str | None]:
    values = item["fieldValues"]
    content = values["content"] if "content" in values else values["news"]
    return values["title"], content, values.get("link")


def build_context(
    news: dict[str, dict[str, Any]], source: str, now: datetime | None = None
) -> dict[str, Any]:
    """Turn selected feed items into the widget's template context."""
    try:
        current = news["information"] if "information" in news else news["error"]
        title, content, link = _fields(current)
        context: dict[str, Any] = {
            "title": title,
            "news": content,
            "link": link,
            "datechanged": current["modifiedAt"],
            "datefetched": timestamp(now),
        }
        if current.get("type") == "error":
            context["type"] = "error"
    except (KeyError, TypeError) as exc:
        logger.warning("News item from %s is incomplete: %r", source, exc)
        return {
            "type": "error",
            "title": ERROR_TITLE,
            "link": "",
            "news": (
                f"<p>Invalid JSON feed returned by <code>{source}</code></p>"
                f"<small>{exc} </small>"
            ),
        }

    alert = news.get("alert")
    if alert:
        try:
            alert_title, alert_content, alert_link = _fields(alert)
        except (KeyError, TypeError):
            logger.debug("Ignoring incomplete alert item from %s", source)
        else:
            context["alert"] = {
                "title": alert_title,
                "news": alert_content,
                "link": alert_link,
            }
    return context


def _alert_panel(alert: dict[str, Any]) -> html.Div:
    children: list[Any] = [
        html.Strong(alert["title"]),
        dcc.Markdown(alert["news"], dangerously_allow_html=True),
    ]
    if alert.get("link"):
        children.append(html.A("Details", href=alert["link"], target="_blank"))
    return html.Div(children, className="news-widget__alert")


def render_context(context: dict[str, Any]) -> html.Div:
    """Render a widget context as Dash components."""
    classes = "news-widget"
    if context.get("type") == "error":
        classes += " news-widget--error"

    children: list[Any] = []
    if context.get("alert"):
        children.append(_alert_panel(context["alert"]))
    children.append(html.H4(context["title"], className="news-widget__title"))
    children.append(dcc.Markdown(context["news"], dangerously_allow_html=True))
    if context.get("link"):
        children.append(
            html.A(
                "Read more",
                href=context["link"],
                target="_blank",
                rel="noopener noreferrer",
            )
        )
    if context.get("datechanged"):
        children.append(
            html.Small(
                f"Updated {context['datechanged']}, fetched {context['datefetched']}",
                className="news-widget__meta",
            )
        )
    return html.Div(children, className=classes, id="news-widget")


def register(cache: Cache, settings: Settings):
    """Register the cached news loader and return the widget renderer."""

    @cache.memoize(timeout=settings.news_cache_seconds)
    def load_context(host: str) -> dict[str, Any]:
        options = request_options(build_parameters(host, settings), settings)
        news = get_news(settings.news_source, options)
        return build_context(news, settings.news_source)

    def render(_: str | None = None) -> html.Div:
        started = time.perf_counter()
        host = request.host if has_request_context() else settings.app_host
        component = render_context(load_context(host))
        logger.debug("%s rendered in %.1f ms", NAME, (time.perf_counter() - started) * 1000)
        return component

    return render
