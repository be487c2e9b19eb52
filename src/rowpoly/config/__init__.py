"""Configuration package."""

from rowpoly.config.settings import RowpolySettings, load_settings

__all__ = [
    "RowpolySettings",
    "load_settings",
]
