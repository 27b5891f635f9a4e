"""
Configuration Management Package

Provides Pydantic-based configuration models and management for gitcontext.
"""

from gitcontext.core.config.models import AppConfig, OutputConfig
from gitcontext.core.config.manager import ConfigManager, DEFAULT_EXCLUDE_PATTERNS

__all__ = [
    "AppConfig",
    "OutputConfig",
    "ConfigManager",
    "DEFAULT_EXCLUDE_PATTERNS",
]
