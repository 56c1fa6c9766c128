"""Dash web module wiring."""

from __future__ import annotations

from collections.abc import Callable

from dash import Dash, Input, Output, html
from flask_caching import Cache

from newswidget.core.flags import news_enabled
from newswidget.core.settings import Settings
from newswidget.web.widgets import news


def _disabled_panel(message: str) -> html.Div:
    return html.Div([html.H4("Feature disabled"), html.P(message)])


def render_news_slot(renderer: Callable[[], html.Div]) -> html.Div:
    """Return the news widget, or a notice when the widget is switched off."""
    if not news_enabled():
        return _disabled_panel("News widget disabled by administrator policy.")
    return renderer()


def register(app: Dash, cache: Cache, settings: Settings) -> None:
    """Register widget callbacks with the Dash app."""

    news_renderer = news.register(cache, settings)

    @app.callback(  # type: ignore[misc]
        Output(news.TARGET, "children"),
        Input(news.TARGET, "id"),
    )
    def _render_news(_: str):  # pragma: no cover - exercised via Dash
        return render_news_slot(news_renderer)
