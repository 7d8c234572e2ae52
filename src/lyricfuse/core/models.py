"""Data models for parsed and normalized lyric lines."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class LineRole(str, Enum):
    """Semantic role of a lyric line or span."""

    MAIN = "main"
    TRANSLATION = "translation"
    ROMANIZATION = "romanization"
    BACKGROUND = "background"
    UNKNOWN = "unknown"

    @classmethod
    def from_attribute(cls, value: Optional[str]) -> "LineRole":
        """Resolve a raw role attribute (``x-`` prefixed or not) to a role."""
        if not value:
            return cls.UNKNOWN
        return _ROLE_ALIASES.get(value.strip().lower(), cls.UNKNOWN)

    @property
    def is_content(self) -> bool:
        """Main-content roles are kept by the merger; satellites are folded in."""
        return self in (LineRole.MAIN, LineRole.UNKNOWN, LineRole.BACKGROUND)


_ROLE_ALIASES = {
    "main": LineRole.MAIN,
    "translation": LineRole.TRANSLATION,
    "x-translation": LineRole.TRANSLATION,
    "roman": LineRole.ROMANIZATION,
    "x-roman": LineRole.ROMANIZATION,
    "romanization": LineRole.ROMANIZATION,
    "x-romanization": LineRole.ROMANIZATION,
    "background": LineRole.BACKGROUND,
    "x-background": LineRole.BACKGROUND,
    "x-bg": LineRole.BACKGROUND,
}


@dataclass(frozen=True)
class Word:
    """A timed sub-span of a line. Times are ms, ``None`` when unknown."""

    start_time: Optional[int]
    end_time: Optional[int]
    text: str


@dataclass(frozen=True)
class RawLine:
    """One parsed markup line, before conversion to the renderer schema."""

    start_time: Optional[int]
    end_time: Optional[int]
    text: str
    words: Tuple[Word, ...] = ()
    role: LineRole = LineRole.UNKNOWN
    is_duet: bool = False
    translated_text: str = ""
    romanized_text: str = ""
    agent: Optional[str] = None

    @property
    def is_background(self) -> bool:
        return self.role is LineRole.BACKGROUND

    @property
    def has_content(self) -> bool:
        return bool(self.text.strip() or self.translated_text or self.romanized_text)


@dataclass(frozen=True)
class WordTiming:
    """Karaoke highlight timing for one word of a normalized line."""

    offset_time: int
    duration: int
    text: str
    is_line_break_hint: bool = False


@dataclass(frozen=True)
class NormalizedLine:
    """A lyric line in the flat schema consumed by the renderer."""

    time: int
    duration: int
    original_text: str
    translated_text: str = ""
    romanized_text: str = ""
    background_text: str = ""
    word_timings: Tuple[WordTiming, ...] = ()
    is_duet: bool = False
    is_background: bool = False
