"""
Configuration models and loading.

This module provides Pydantic models for tasklist configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .env import load_layered_env
from .loader import clear_cache, load_config
from .models import LoggingConfig, ServerConfig, StorageConfig, TasklistConfig

__all__ = [
    # Models
    "LoggingConfig",
    "ServerConfig",
    "StorageConfig",
    "TasklistConfig",
    # Loader functions
    "clear_cache",
    "load_config",
    "load_layered_env",
]
