"""Dash application entry point for the admin dashboard."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from dash import Dash
from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_caching import Cache

from newswidget import web
from newswidget.core.logging import setup_logger
from newswidget.core.settings import load_settings
from newswidget.web.layout import make_layout

load_dotenv()

CACHE_DIR = Path(".cache")
CACHE_DIR.mkdir(exist_ok=True)

settings = load_settings()
setup_logger(settings.log_dir, settings.log_level)

server = Flask(__name__)
cache = Cache(
    server,
    config={
        "CACHE_TYPE": "FileSystemCache",
        "CACHE_DIR": str(CACHE_DIR),
        "CACHE_DEFAULT_TIMEOUT": 300,
    },
)


def _create_dash_app(flask_server: Flask) -> Dash:
    return Dash(
        __name__,
        server=flask_server,
        suppress_callback_exceptions=True,
        title=settings.site_name,
    )


@server.get("/health")
def healthcheck() -> Any:
    """Return a basic health payload."""
    return jsonify({"ok": True})


app = _create_dash_app(server)
app.layout = make_layout(settings.site_name)
web.register(app, cache, settings)


if __name__ == "__main__":
    app.run(debug=True)
