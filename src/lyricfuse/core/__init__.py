"""Core TTML lyrics processing."""

from .models import LineRole, NormalizedLine, RawLine, Word, WordTiming
from .pipeline import fetch_amll_lyrics, parse_and_merge, process_ttml

__all__ = [
    "LineRole",
    "Word",
    "RawLine",
    "WordTiming",
    "NormalizedLine",
    "process_ttml",
    "parse_and_merge",
    "fetch_amll_lyrics",
]
