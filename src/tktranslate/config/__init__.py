"""
tktranslate – Config Package
----------------------------
Holds configuration loaders and settings for the translate client.
"""

# Expose config loader utilities at the package level.
from .settings import Settings, get_config_value, get_settings, load_config  # noqa: F401

__all__ = ["Settings", "get_config_value", "get_settings", "load_config"]
