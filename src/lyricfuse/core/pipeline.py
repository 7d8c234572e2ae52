"""TTML lyrics pipeline: disambiguate, parse, merge, convert.

Every entry point here degrades to "nothing usable" instead of raising, so a
caller can fall back to another lyric source.
"""

from typing import List, Optional

from ..config import MERGE_TOLERANCE_MS
from ..utils.logging import get_logger
from .convert import convert_lines
from .fetch import fetch_ttml
from .language import clean_translations
from .merge import merge_lines
from .models import NormalizedLine, RawLine
from .ttml import parse_ttml

logger = get_logger(__name__)


def parse_and_merge(
    ttml_text: str,
    *,
    tolerance_ms: int = MERGE_TOLERANCE_MS,
    strict: bool = False,
) -> List[RawLine]:
    """Run the disambiguation, parse and merge stages."""
    cleaned = clean_translations(ttml_text)
    parsed = parse_ttml(cleaned, strict=strict)
    if not parsed:
        return []
    return merge_lines(parsed, tolerance_ms)


def process_ttml(
    ttml_text: str, *, tolerance_ms: int = MERGE_TOLERANCE_MS
) -> List[NormalizedLine]:
    """
    Turn a TTML document into normalized lines.

    Returns an empty list when the document yields nothing usable.
    """
    try:
        merged = parse_and_merge(ttml_text, tolerance_ms=tolerance_ms)
        return convert_lines(merged)
    except Exception as e:
        logger.exception(f"TTML processing failed: {e}")
        return []


def fetch_amll_lyrics(song_id: str, **fetch_kwargs) -> Optional[List[NormalizedLine]]:
    """
    Fetch and process the TTML lyrics for a song.

    Returns None when no document is available or it produced no lines.
    """
    try:
        ttml_text = fetch_ttml(song_id, **fetch_kwargs)
    except Exception as e:
        logger.warning(f"TTML fetch error for {song_id}: {e}")
        return None
    if not ttml_text:
        return None

    lines = process_ttml(ttml_text)
    if not lines:
        logger.info(f"TTML for {song_id} produced no lines")
        return None
    logger.info(f"Got {len(lines)} TTML lines for {song_id}")
    return lines
