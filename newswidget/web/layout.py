"""Layout primitives for the Dash application."""

from __future__ import annotations

from dash import html

from newswidget.web.widgets import news


def make_layout(site_name: str = "Dashboard") -> html.Div:
    """Return the root Dash layout with the widget slots."""
    return html.Div(
        [
            html.Header(
                [html.H2(site_name), html.P("Administration dashboard")],
                className="header",
            ),
            html.Div(
                [
                    html.Main(id="dashboard-main", className="dashboard-main"),
                    html.Aside(
                        [html.Div(id=news.TARGET, className="widget-slot")],
                        className="dashboard-aside",
                    ),
                ],
                style={"display": "flex", "gap": "24px"},
            ),
        ]
    )
