"""
Constants and configuration for the ai‑services client library.

All values are loaded from environment variables, allowing the deployment
environment to control behaviour without code changes.  Per‑service settings
(URL, credentials) are read separately by :mod:`ai_services_lib.config`.
"""

import os


class _DontChangeMe:
    MAIN_ENV_PREFIX = "AI_SERVICES_"


def bool_env_value(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Timeout (seconds) of a single HTTP request
DEFAULT_TIMEOUT = int(
    os.environ.get(f"{_DontChangeMe.MAIN_ENV_PREFIX}TIMEOUT", "60").strip()
)

# Number of retries for transient failures (429/5xx, connection errors)
DEFAULT_RETRIES = int(
    os.environ.get(f"{_DontChangeMe.MAIN_ENV_PREFIX}RETRIES", "2").strip()
)

# Default logging level
LOG_LEVEL = (
    os.environ.get(f"{_DontChangeMe.MAIN_ENV_PREFIX}LOG_LEVEL", "INFO").strip().upper()
)

# Disable TLS certificate verification for every service (not recommended)
DISABLE_SSL_VERIFICATION = bool_env_value(
    f"{_DontChangeMe.MAIN_ENV_PREFIX}DISABLE_SSL_VERIFICATION"
)

# Value of the User-Agent header sent with every request
USER_AGENT = os.environ.get(
    f"{_DontChangeMe.MAIN_ENV_PREFIX}USER_AGENT", "ai-services-lib-python"
).strip()

# =============================================================================
# WIRE DEFAULTS
# =============================================================================
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"
