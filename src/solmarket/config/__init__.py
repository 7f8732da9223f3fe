"""
Configuration Module

Provides centralized configuration management using Pydantic Settings.
"""

from solmarket.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
