"""Widget registry exports."""

from . import news  # noqa: F401

__all__ = ["news"]
