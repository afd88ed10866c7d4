"""
Configuration model and loading.

Inputs come from CLI options or `INPUT_*` environment variables (the GitHub
Action convention), optionally seeded from .env files.
"""

from .env import load_layered_env, user_env_path
from .loader import (
    load_config,
    load_download_request,
    parse_bool,
    parse_headers,
)
from .models import SyncConfig

__all__ = [
    "SyncConfig",
    "load_config",
    "load_download_request",
    "load_layered_env",
    "parse_bool",
    "parse_headers",
    "user_env_path",
]
