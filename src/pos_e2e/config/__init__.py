"""Configuration module for the POS API e2e harness.

Usage:
    from pos_e2e.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.base_url)
"""

from pos_e2e.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
