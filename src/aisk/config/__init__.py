"""Configuration system for aisk.

Main exports:
- AiskSettings: Root configuration class (environment, .env, defaults)
- AppPaths: Resolved application paths
- LoggingConfig: Logging configuration
- find_project_root: Locate the enclosing project directory
"""

from aisk.config.logging_config import LoggingConfig
from aisk.config.paths import AppPaths, find_project_root
from aisk.config.settings import AiskSettings

__all__ = [
    "AiskSettings",
    "AppPaths",
    "LoggingConfig",
    "find_project_root",
]
