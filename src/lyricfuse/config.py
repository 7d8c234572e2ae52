"""Configuration settings for lyricfuse."""

import os

from .exceptions import ConfigError

# Remote TTML store; "%s" is replaced by the song id
AMLL_DB_SERVER = os.getenv(
    "LYRICFUSE_AMLL_SERVER", "https://amlldb.bikonoo.com/ncm-lyrics/%s.ttml"
)

# HTTP settings (can be overridden via environment variables)
HTTP_TIMEOUT = float(os.getenv("LYRICFUSE_HTTP_TIMEOUT", "10"))
FETCH_MAX_RETRIES = int(os.getenv("LYRICFUSE_FETCH_MAX_RETRIES", "2"))
FETCH_RETRY_DELAY = 1.0  # seconds, doubled after each attempt

# Satellite lines within this many ms of a content line's start are merged
MERGE_TOLERANCE_MS = int(os.getenv("LYRICFUSE_MERGE_TOLERANCE_MS", "300"))

# Performer-agent ids that mark a secondary voice
DUET_AGENT_IDS = frozenset({"v2", "female", "woman"})

# Language-tag priorities for picking the kept translation
PREFERRED_SCRIPTS = ("Hans", "Hant")
CHINESE_LANGUAGE_PREFIX = "zh"


def validate_config() -> None:
    """Validate configuration values."""
    if "%s" not in AMLL_DB_SERVER:
        raise ConfigError("AMLL server URL must contain a '%s' placeholder")

    if HTTP_TIMEOUT <= 0:
        raise ConfigError("Invalid HTTP timeout")

    if FETCH_MAX_RETRIES < 0:
        raise ConfigError("Invalid fetch retry count")

    if MERGE_TOLERANCE_MS < 0:
        raise ConfigError("Invalid merge tolerance")


# Validate config on import
validate_config()
