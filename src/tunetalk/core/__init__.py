"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging setup (Loguru)
- Path validation for on-disk stores

Clean architecture principle: The core layer has no dependencies on
domain or web layers.
"""

from .config import (
    Config,
    load_config,
    parse_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    get_mood_history_dir,
)
from .output import setup_loguru
from .path_security import is_path_within, is_safe_identifier

__all__ = [
    # Config
    "Config",
    "load_config",
    "parse_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "get_mood_history_dir",
    # Logging
    "setup_loguru",
    # Paths
    "is_path_within",
    "is_safe_identifier",
]
