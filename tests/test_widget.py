"""Widget context building and rendering."""

from __future__ import annotations

import json
from datetime import datetime

import pytest
from flask import Flask
from flask_caching import Cache

from newswidget.core import news
from newswidget.core.settings import Settings
from newswidget.web.widgets import news as widget

SOURCE = "https://news.example.test/"


def _item(title: str, **extra) -> dict:
    item = {
        "fieldValues": {"title": title, "content": f"<p>{title} body</p>", "link": "https://example.test/a"},
        "modifiedAt": "2024-05-01 10:00:00",
    }
    item.update(extra)
    return item


def _walk(component):
    yield component
    children = getattr(component, "children", None)
    if isinstance(children, (list, tuple)):
        for child in children:
            yield from _walk(child)
    elif children is not None and hasattr(children, "children"):
        yield from _walk(children)


def test_information_item_fills_context():
    context = widget.build_context(
        {"information": _item("Release")}, SOURCE, now=datetime(2024, 6, 1, 12, 0, 0)
    )
    assert context == {
        "title": "Release",
        "news": "<p>Release body</p>",
        "link": "https://example.test/a",
        "datechanged": "2024-05-01 10:00:00",
        "datefetched": "2024-06-01 12:00:00",
    }


def test_news_field_is_accepted_for_content():
    item = {"fieldValues": {"title": "T", "news": "N", "link": ""}, "modifiedAt": "x"}
    assert widget.build_context({"information": item}, SOURCE)["news"] == "N"


def test_error_item_becomes_error_context():
    result = {"error": news.error_item("<p>Unable to connect to x</p>")}
    context = widget.build_context(result, SOURCE)
    assert context["type"] == "error"
    assert context["title"] == news.ERROR_TITLE
    assert context["datechanged"] == news.EPOCH


def test_incomplete_item_falls_back_to_invalid_feed():
    context = widget.build_context({"information": {"fieldValues": {}}}, SOURCE)
    assert context["type"] == "error"
    assert context["link"] == ""
    assert f"Invalid JSON feed returned by <code>{SOURCE}</code>" in context["news"]


def test_alert_is_exposed_next_to_information():
    result = {"information": _item("News"), "alert": _item("Security fix", type="alert")}
    context = widget.build_context(result, SOURCE)
    assert context["alert"]["title"] == "Security fix"
    rendered = widget.render_context(context)
    classes = [getattr(node, "className", None) for node in _walk(rendered)]
    assert "news-widget__alert" in classes


def test_render_error_context_uses_error_class():
    context = widget.build_context({"error": news.error_item("<p>boom</p>")}, SOURCE)
    rendered = widget.render_context(context)
    assert rendered.className == "news-widget news-widget--error"
    assert not any(getattr(node, "href", None) for node in _walk(rendered))


def test_render_information_links_to_item():
    rendered = widget.render_context(widget.build_context({"information": _item("Hi")}, SOURCE))
    links = [node.href for node in _walk(rendered) if getattr(node, "href", None)]
    assert links == ["https://example.test/a"]


@pytest.fixture()
def server():
    app = Flask(__name__)
    cache = Cache(app, config={"CACHE_TYPE": "SimpleCache"})
    return app, cache


def test_register_fetches_once_within_cache_duration(server, monkeypatch):
    app, cache = server
    calls: list[dict] = []

    def fake_get_news(source, options):
        calls.append(options)
        return {"information": _item("Cached")}

    monkeypatch.setattr(widget, "get_news", fake_get_news)
    monkeypatch.setattr(
        news.db, "platform", lambda url=None: {"driver_name": "sqlite", "server_version": "3"}
    )
    render = widget.register(cache, Settings(news_source=SOURCE, news_cache_seconds=60))

    with app.test_request_context("/", base_url="http://admin.example.test"):
        first = render()
        second = render()

    assert len(calls) == 1
    assert calls[0]["timeout"] == 6.0
    assert first.className == second.className == "news-widget"


def test_register_reports_request_host(server, monkeypatch):
    app, cache = server
    captured: list[str] = []

    def fake_build_parameters(host, settings):
        captured.append(host)
        return {"host": host}

    monkeypatch.setattr(widget, "build_parameters", fake_build_parameters)
    monkeypatch.setattr(widget, "get_news", lambda source, options: {"information": _item("x")})
    render = widget.register(cache, Settings())

    with app.test_request_context("/", base_url="http://admin.example.test"):
        render()
    assert captured == ["admin.example.test"]


def test_register_renders_error_panel_on_bad_feed(server, monkeypatch):
    app, cache = server
    monkeypatch.setattr(news.requests, "get", lambda url, **kw: _Response("not json"))
    monkeypatch.setattr(
        news.db, "platform", lambda url=None: {"driver_name": "sqlite", "server_version": "3"}
    )
    render = widget.register(cache, Settings(news_source=SOURCE))

    with app.test_request_context("/"):
        rendered = render()
    assert rendered.className == "news-widget news-widget--error"


class _Response:
    def __init__(self, text: str) -> None:
        self.text = text

    def raise_for_status(self) -> None:
        return None


def test_context_survives_json_roundtrip():
    context = widget.build_context({"information": _item("Serializable")}, SOURCE)
    assert json.loads(json.dumps(context)) == context


def test_register_uses_configured_host_outside_requests(server, monkeypatch):
    app, cache = server
    captured: list[str] = []

    def fake_build_parameters(host, settings):
        captured.append(host)
        return {"host": host}

    monkeypatch.setattr(widget, "build_parameters", fake_build_parameters)
    monkeypatch.setattr(widget, "get_news", lambda source, options: {"information": _item("x")})
    render = widget.register(cache, Settings(app_host="admin.internal"))

    with app.app_context():
        render()
    assert captured == ["admin.internal"]


def test_incomplete_item_shows_plain_error_message():
    context = widget.build_context({"information": {"fieldValues": {}}}, SOURCE)
    assert "KeyError" not in context["news"]
