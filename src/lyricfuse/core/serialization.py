"""JSON serialization for normalized lyric lines."""

import json
from pathlib import Path
from typing import List, Union

from .models import NormalizedLine, RawLine, WordTiming


def line_to_dict(line: NormalizedLine) -> dict:
    """Convert a NormalizedLine into the renderer's camelCase dict."""
    return {
        "time": line.time,
        "duration": line.duration,
        "originalLyric": line.original_text,
        "translatedLyric": line.translated_text,
        "romanLyric": line.romanized_text,
        "bgLyric": line.background_text,
        "dynamicLyricTime": line.time,
        "dynamicLyric": [
            {
                "time": w.offset_time,
                "duration": w.duration,
                "word": w.text,
                "isLineBreakHint": w.is_line_break_hint,
            } for w in line.word_timings
        ],
        "isDuet": line.is_duet,
        "isBG": line.is_background,
    }


def lines_to_json(lines: List[NormalizedLine]) -> List[dict]:
    return [line_to_dict(line) for line in lines]


def line_from_dict(item: dict) -> NormalizedLine:
    """Convert a renderer dict back into a NormalizedLine."""
    return NormalizedLine(
        time=int(item.get("time", 0)),
        duration=int(item.get("duration", 0)),
        original_text=item.get("originalLyric", ""),
        translated_text=item.get("translatedLyric", ""),
        romanized_text=item.get("romanLyric", ""),
        background_text=item.get("bgLyric", ""),
        word_timings=tuple(
            WordTiming(
                offset_time=int(w.get("time", 0)),
                duration=int(w.get("duration", 0)),
                text=w.get("word", ""),
                is_line_break_hint=bool(w.get("isLineBreakHint", False)),
            ) for w in item.get("dynamicLyric", [])
        ),
        is_duet=bool(item.get("isDuet", False)),
        is_background=bool(item.get("isBG", False)),
    )


def lines_from_json(data: List[dict]) -> List[NormalizedLine]:
    return [line_from_dict(item) for item in data]


def raw_lines_to_json(lines: List[RawLine]) -> List[dict]:
    """Dump parsed lines (before conversion) for inspection."""
    return [
        {
            "start_time": line.start_time,
            "end_time": line.end_time,
            "text": line.text,
            "role": line.role.value,
            "is_duet": line.is_duet,
            "agent": line.agent,
            "translated_text": line.translated_text,
            "romanized_text": line.romanized_text,
            "words": [
                {
                    "text": w.text,
                    "start_time": w.start_time,
                    "end_time": w.end_time,
                } for w in line.words
            ],
        } for line in lines
    ]


def save_json(filepath: Union[str, Path], data: List[dict]) -> None:
    """Write JSON-ready dicts to a UTF-8 file."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


def save_lines_to_json(filepath: Union[str, Path], lines: List[NormalizedLine]) -> None:
    """Save normalized lines to a UTF-8 JSON file."""
    save_json(filepath, lines_to_json(lines))


def load_lines_from_json(filepath: Union[str, Path]) -> List[NormalizedLine]:
    """Load normalized lines from a JSON file written by save_lines_to_json."""
    with open(filepath, "r", encoding="utf-8") as f:
        return lines_from_json(json.load(f))
