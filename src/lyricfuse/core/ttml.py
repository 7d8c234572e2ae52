"""TTML lyric parsing.

This module handles:
- TTML timestamp parsing
- Walking <p> lines and their nested <span> elements
- Classifying spans as words, translations, romanizations or background vocals
- Extracting background vocals as separate lines with their own timing
"""

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field, replace
from typing import Callable, Iterator, List, Optional, Tuple

from ..config import DUET_AGENT_IDS
from ..exceptions import TTMLParseError
from ..utils.logging import get_logger
from .models import LineRole, RawLine, Word

logger = get_logger(__name__)

_XML_DECL_RE = re.compile(r"^\s*<\?xml.*?\?>", re.DOTALL)

# (open, close) pairs wrapping background vocals, e.g. "(oh oh)"
_PAREN_PAIRS = (("(", ")"), ("（", "）"))


# ----------------------
# Timestamps
# ----------------------

def parse_time(value: Optional[str]) -> Optional[int]:
    """
    Parse a TTML clock value into milliseconds.

    Accepts ``HH:MM:SS.mmm``, ``MM:SS.mmm`` or bare seconds (optionally
    suffixed with ``s``). Returns None for missing or unparsable input.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if ":" not in value and value.endswith("s"):
        value = value[:-1]

    parts = value.split(":")
    try:
        if len(parts) == 3:
            seconds = int(parts[0]) * 3600 + int(parts[1]) * 60 + float(parts[2])
        elif len(parts) == 2:
            seconds = int(parts[0]) * 60 + float(parts[1])
        elif len(parts) == 1:
            seconds = float(parts[0])
        else:
            raise ValueError("too many fields")
    except ValueError as e:
        logger.debug(f"Ignoring unparsable timestamp {value!r}: {e}")
        return None

    if not math.isfinite(seconds):
        return None
    # Half-up rounding
    return int(math.floor(seconds * 1000 + 0.5))


# ----------------------
# Element helpers
# ----------------------

def _local(name: str) -> str:
    """Strip a namespace (``{uri}`` or ``prefix:``) from a tag or attribute name."""
    if "}" in name:
        return name.rsplit("}", 1)[1]
    return name.rsplit(":", 1)[-1]


def _attr(elem: ET.Element, local_name: str) -> Optional[str]:
    for key, value in elem.attrib.items():
        if _local(key) == local_name:
            return value
    return None


def _is_span(elem: ET.Element) -> bool:
    return isinstance(elem.tag, str) and _local(elem.tag) == "span"


def _is_duet_agent(agent: Optional[str]) -> bool:
    return bool(agent) and agent.strip().lower() in DUET_AGENT_IDS


def _strip_parentheses(text: str, words: List[Word]) -> Tuple[str, List[Word]]:
    """Remove one pair of parentheses wrapping ``text`` and the matching word edges."""
    for open_, close in _PAREN_PAIRS:
        if len(text) >= 2 and text.startswith(open_) and text.endswith(close):
            text = text[1:-1].strip()
            if words:
                words = list(words)
                first = words[0].text.lstrip()
                if first.startswith(open_):
                    words[0] = replace(words[0], text=first[len(open_):])
                last = words[-1].text.rstrip()
                if last.endswith(close):
                    words[-1] = replace(words[-1], text=last[:-len(close)])
            break
    return text, words


# ----------------------
# Span walking
# ----------------------

@dataclass
class _Collected:
    """Text, words and inline satellite text gathered from one element's children."""

    text_parts: List[str] = field(default_factory=list)
    words: List[Word] = field(default_factory=list)
    translation_parts: List[str] = field(default_factory=list)
    romanization_parts: List[str] = field(default_factory=list)

    def add_text(self, text: Optional[str]) -> None:
        if not text:
            return
        # Indentation between elements
        if not text.strip() and "\n" in text:
            return
        self.text_parts.append(text)

    @property
    def text(self) -> str:
        return "".join(self.text_parts).strip()

    @property
    def translation(self) -> str:
        return "".join(self.translation_parts).strip()

    @property
    def romanization(self) -> str:
        return "".join(self.romanization_parts).strip()


def _collect_children(
    elem: ET.Element,
    on_background: Optional[Callable[[ET.Element], None]] = None,
) -> _Collected:
    """Walk the direct children of a line (or background span) in document order.

    Background spans go to ``on_background`` when given; otherwise they are
    treated like any other span.
    """
    collected = _Collected()
    collected.add_text(elem.text)

    for child in elem:
        if _is_span(child):
            role = LineRole.from_attribute(_attr(child, "role"))
            span_text = "".join(child.itertext())
            if role is LineRole.TRANSLATION:
                collected.translation_parts.append(span_text)
            elif role is LineRole.ROMANIZATION:
                collected.romanization_parts.append(span_text)
            elif role is LineRole.BACKGROUND and on_background is not None:
                on_background(child)
            else:
                begin = parse_time(_attr(child, "begin"))
                end = parse_time(_attr(child, "end"))
                if begin is not None and end is not None:
                    collected.words.append(Word(begin, end, span_text))
                collected.text_parts.append(span_text)
        collected.add_text(child.tail)

    return collected


def _background_line(
    span: ET.Element,
    parent: RawLine,
) -> Optional[RawLine]:
    """Build a satellite line for a background-vocal span inside ``parent``."""
    begin = parse_time(_attr(span, "begin"))
    end = parse_time(_attr(span, "end"))
    start_time = begin if begin is not None else parent.start_time
    end_time = end if end is not None else parent.end_time

    collected = _collect_children(span)
    text = collected.text
    words = collected.words
    if not words and text and start_time is not None and end_time is not None:
        words = [Word(start_time, end_time, text)]
    text, words = _strip_parentheses(text, words)

    line = RawLine(
        start_time=start_time,
        end_time=end_time,
        text=text,
        words=tuple(words),
        role=LineRole.BACKGROUND,
        is_duet=parent.is_duet,
        translated_text=collected.translation,
        romanized_text=collected.romanization,
        agent=parent.agent,
    )
    return line if line.has_content else None


def _parse_paragraph(
    p: ET.Element, group_role: Optional[str]
) -> Tuple[Optional[int], List[RawLine]]:
    """Parse one <p> into its main line plus any background satellite lines.

    Returns the best known start time for the paragraph (for sorting lines
    with no timestamp) alongside the retained lines.
    """
    start_time = parse_time(_attr(p, "begin"))
    end_time = parse_time(_attr(p, "end"))
    role = LineRole.from_attribute(_attr(p, "role") or group_role)
    agent = _attr(p, "agent")

    # Parent values the background spans inherit from
    shell = RawLine(
        start_time=start_time,
        end_time=end_time,
        text="",
        role=role,
        is_duet=_is_duet_agent(agent),
        agent=agent,
    )

    background_spans: List[ET.Element] = []
    collected = _collect_children(p, on_background=background_spans.append)

    text = collected.text
    translation = collected.translation
    romanization = collected.romanization
    words = collected.words
    if not words and text and not translation and not romanization:
        words = [Word(start_time, end_time, text)]
    if role is LineRole.BACKGROUND:
        text, words = _strip_parentheses(text, words)

    main = replace(
        shell,
        text=text,
        words=tuple(words),
        translated_text=translation,
        romanized_text=romanization,
    )

    lines = [main] if main.has_content else []
    for span in background_spans:
        background = _background_line(span, shell)
        if background is not None:
            lines.append(background)

    anchor = start_time
    if anchor is None:
        anchor = next((w.start_time for w in words if w.start_time is not None), None)
    return anchor, lines


def _iter_paragraphs(
    elem: ET.Element, group_role: Optional[str]
) -> Iterator[Tuple[ET.Element, Optional[str]]]:
    """Yield every <p> below ``elem`` with the role of its nearest enclosing group."""
    for child in elem:
        if not isinstance(child.tag, str):
            continue
        if _local(child.tag) == "p":
            yield child, group_role
        else:
            yield from _iter_paragraphs(child, _attr(child, "role") or group_role)


# ----------------------
# Document parsing
# ----------------------

def _parse_root(text: str) -> ET.Element:
    try:
        return ET.fromstring(_XML_DECL_RE.sub("", text, count=1))
    except ET.ParseError as e:
        raise TTMLParseError(f"Malformed TTML: {e}") from e


def _find_body(root: ET.Element) -> ET.Element:
    for elem in root.iter():
        if isinstance(elem.tag, str) and _local(elem.tag) == "body":
            return elem
    raise TTMLParseError("TTML document has no <body> element")


def parse_ttml(text: str, strict: bool = False) -> List[RawLine]:
    """
    Parse a TTML document into time-ordered raw lines.

    Args:
        text: TTML markup, ideally already passed through clean_translations
        strict: Raise TTMLParseError on structural failure instead of
                logging it and returning an empty list

    Returns:
        Lines sorted by start time; lines without a start time sort by
        their paragraph's nearest known time.
    """
    try:
        body = _find_body(_parse_root(text))
    except TTMLParseError as e:
        if strict:
            raise
        logger.warning(f"TTML parse failed: {e}")
        return []

    keyed: List[Tuple[int, RawLine]] = []
    previous_anchor = 0
    for p, group_role in _iter_paragraphs(body, None):
        anchor, lines = _parse_paragraph(p, group_role)
        if anchor is None:
            anchor = previous_anchor
        previous_anchor = anchor
        for line in lines:
            keyed.append((line.start_time if line.start_time is not None else anchor, line))

    keyed.sort(key=lambda item: item[0])
    logger.debug(f"Parsed {len(keyed)} TTML lines")
    return [line for _, line in keyed]
