"""
Configuration utilities for thingscli.

Keys read from the environment (or a .thingscli.env file):
    THINGS3_AUTH_TOKEN    Things URL-scheme auth token
    THINGSCLI_OSASCRIPT   alternative osascript binary (read by things_api)
    THINGSCLI_LOG_LEVEL   stderr log level
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_FILE_NAME = ".thingscli.env"

AUTH_TOKEN_KEY = "THINGS3_AUTH_TOKEN"
LOG_LEVEL_KEY = "THINGSCLI_LOG_LEVEL"


def load_env_vars() -> None:
    """
    Load environment variables from .env files in the following order:
    1. .thingscli.env in the current directory
    2. .thingscli.env in the user's home directory

    Variables already present in the environment are never overridden.
    """
    # Load from current directory
    if os.path.exists(ENV_FILE_NAME):
        load_dotenv(ENV_FILE_NAME)

    # Load from home directory
    home_env = Path.home() / ENV_FILE_NAME
    if home_env.exists():
        load_dotenv(home_env)


def get_config(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get configuration value from environment variables."""
    return os.getenv(key, default)


def get_auth_token() -> Optional[str]:
    """Things URL-scheme auth token, or None when not configured."""
    token = get_config(AUTH_TOKEN_KEY)
    return token or None
