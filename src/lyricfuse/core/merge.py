"""Reattach translation and romanization lines to their lyric lines by time."""

from dataclasses import replace
from typing import List, Optional, Sequence

from ..config import MERGE_TOLERANCE_MS
from ..utils.logging import get_logger
from .models import LineRole, RawLine

logger = get_logger(__name__)


def is_time_match(a: RawLine, b: RawLine, tolerance_ms: int = MERGE_TOLERANCE_MS) -> bool:
    """True when both lines have a start time and they differ by less than the tolerance."""
    if a.start_time is None or b.start_time is None:
        return False
    return abs(a.start_time - b.start_time) < tolerance_ms


def _first_match(
    line: RawLine, satellites: Sequence[RawLine], tolerance_ms: int
) -> Optional[RawLine]:
    return next((s for s in satellites if is_time_match(line, s, tolerance_ms)), None)


def merge_into(
    line: RawLine,
    translations: Sequence[RawLine],
    romanizations: Sequence[RawLine],
    tolerance_ms: int = MERGE_TOLERANCE_MS,
) -> RawLine:
    """Return a copy of ``line`` carrying the text of its first matching satellites."""
    changes = {}
    translation = _first_match(line, translations, tolerance_ms)
    if translation is not None:
        changes["translated_text"] = translation.text
    romanization = _first_match(line, romanizations, tolerance_ms)
    if romanization is not None:
        changes["romanized_text"] = romanization.text
    return replace(line, **changes) if changes else line


def merge_lines(
    lines: Sequence[RawLine], tolerance_ms: int = MERGE_TOLERANCE_MS
) -> List[RawLine]:
    """
    Fold translation/romanization satellite lines into the content lines.

    Content lines (main, unknown and background roles) are kept in order;
    satellite lines are consumed. Background lines stay independent entries.
    """
    content = [line for line in lines if line.role.is_content]
    if len(content) == len(lines):
        return list(lines)

    translations = [line for line in lines if line.role is LineRole.TRANSLATION]
    romanizations = [line for line in lines if line.role is LineRole.ROMANIZATION]
    logger.debug(
        f"Merging {len(translations)} translation and {len(romanizations)} "
        f"romanization lines into {len(content)} lines"
    )
    return [merge_into(line, translations, romanizations, tolerance_ms) for line in content]
