"""lyricfuse - normalize TTML timed lyrics for highlighted display."""

__version__ = "0.1.0"
