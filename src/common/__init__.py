# Common utilities and shared modules
"""
Shared components for the supamarker CLI:
- Configuration resolution (TOML file > environment > defaults)
- Logging configuration
"""

from .config import ConfigError, FileConfig, ResolvedConfig, load_config, resolve_config
from .logging import setup_logging

__all__ = [
    "ConfigError",
    "FileConfig",
    "ResolvedConfig",
    "load_config",
    "resolve_config",
    "setup_logging",
]
