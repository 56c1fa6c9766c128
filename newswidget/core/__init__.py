"""Core functionality for the news widget."""

from . import db, flags, news, settings, util, version

__all__ = [
    "db",
    "flags",
    "news",
    "settings",
    "util",
    "version",
]
