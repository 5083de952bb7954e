"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "m2-lifecycle"
APP_AUTHOR = "m2-lifecycle"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONTROL_PLANE_URL = "M2_CONTROL_PLANE_URL"
ENV_API_TOKEN = "M2_API_TOKEN"
ENV_PROFILE = "M2_PROFILE"

# HTTP defaults
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3

# Lifecycle defaults (seconds)
DEFAULT_OPERATION_TIMEOUT = 30 * 60.0
DEFAULT_POLL_INTERVAL = 10.0
