"""Custom exceptions for lyricfuse."""

class LyricFuseError(Exception):
    """Base exception for lyricfuse."""
    pass

class ConfigError(LyricFuseError):
    """Invalid configuration value."""
    pass

class FetchError(LyricFuseError):
    """Error retrieving a lyric document."""
    pass

class TTMLParseError(LyricFuseError):
    """Malformed markup or missing body container."""
    pass
