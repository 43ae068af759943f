"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Error taxonomy
- Logging (Loguru) and console output (Rich)
"""

# Configuration
from .config import (
    AuthConfig,
    Config,
    DisplayConfig,
    LoggingConfig,
    StorageConfig,
    WebConfig,
    create_default_config,
    ensure_directories,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
    parse_config,
)

# Errors
from .errors import (
    NotFound,
    NowPlayingError,
    StorageError,
    Unauthorized,
    ValidationError,
)

# Console
from .console import get_console, safe_print

__all__ = [
    # Config
    "AuthConfig",
    "Config",
    "DisplayConfig",
    "LoggingConfig",
    "StorageConfig",
    "WebConfig",
    "create_default_config",
    "ensure_directories",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "load_config",
    "parse_config",
    # Errors
    "NotFound",
    "NowPlayingError",
    "StorageError",
    "Unauthorized",
    "ValidationError",
    # Console
    "get_console",
    "safe_print",
]
