"""
Cart widget host configuration: all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import logging
import os


class Settings:
    """Application settings from environment variables."""

    # Application
    ENVIRONMENT: str = os.environ.get("CART_WIDGET_ENVIRONMENT", "development")
    TITLE: str = os.environ.get("CART_WIDGET_TITLE", "Shopping Cart")

    # Logging
    LOG_LEVEL: str = os.environ.get("CART_WIDGET_LOG_LEVEL", "INFO").upper()

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.LOG_LEVEL)


# Singleton instance
settings = Settings()

if not isinstance(settings.log_level_number, int):
    raise RuntimeError(f"CART_WIDGET_LOG_LEVEL is not a logging level: {settings.LOG_LEVEL!r}")
