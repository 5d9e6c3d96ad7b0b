"""Configuration management for devicepanel.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for the device address.
"""

from devicepanel.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
