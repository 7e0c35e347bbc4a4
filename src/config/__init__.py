"""
Order Analytics Engine
Configuration Module
"""
from .settings import AnalyticsSettings, DatabaseSettings, Settings, get_settings

__all__ = ["AnalyticsSettings", "DatabaseSettings", "Settings", "get_settings"]
