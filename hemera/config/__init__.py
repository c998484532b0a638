"""Configuration module for Hemera."""

from hemera.config.settings import HemeraSettings, load_settings

__all__ = [
    "HemeraSettings",
    "load_settings",
]
