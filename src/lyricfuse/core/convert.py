"""Conversion of merged lines into the renderer's flat schema."""

from typing import Iterable, List, Optional

from .models import NormalizedLine, RawLine, Word, WordTiming


def _span(start: Optional[int], end: Optional[int]) -> int:
    """Duration between two optional times; unknown or negative spans are 0."""
    if start is None or end is None:
        return 0
    return max(end - start, 0)


def to_word_timing(word: Word) -> WordTiming:
    return WordTiming(
        offset_time=word.start_time if word.start_time is not None else 0,
        duration=_span(word.start_time, word.end_time),
        text=word.text,
    )


def to_normalized(line: RawLine) -> NormalizedLine:
    """Map one merged line to a NormalizedLine. Never fails."""
    return NormalizedLine(
        time=line.start_time if line.start_time is not None else 0,
        duration=_span(line.start_time, line.end_time),
        original_text=line.text or "",
        translated_text=line.translated_text or "",
        romanized_text=line.romanized_text or "",
        word_timings=tuple(to_word_timing(w) for w in line.words),
        is_duet=line.is_duet,
        is_background=line.is_background,
    )


def convert_lines(lines: Iterable[RawLine]) -> List[NormalizedLine]:
    return [to_normalized(line) for line in lines]
