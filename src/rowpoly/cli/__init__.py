"""CLI package."""

from rowpoly.cli.app import app

__all__ = ["app"]
