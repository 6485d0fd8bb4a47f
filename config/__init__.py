"""
Configuration Management Module
"""
from .settings import (
    MIN_TIMEOUT_SECONDS,
    Settings,
    HypatiaSettings,
    FactorsSettings,
    LoggingSettings,
    get_settings,
)

__all__ = [
    "MIN_TIMEOUT_SECONDS",
    "Settings",
    "HypatiaSettings",
    "FactorsSettings",
    "LoggingSettings",
    "get_settings",
]
