"""Translation language disambiguation for TTML documents.

When a document embeds translations in several languages, only one is kept:
Simplified Chinese first, then Traditional Chinese, then any other Chinese
tag, then whichever language appears first. Elements in the other languages
are cut out of the raw markup before it is parsed, so this module works on
text and never builds a tree.
"""

import re
from typing import Dict, List, Optional, Pattern

import langcodes

from ..config import CHINESE_LANGUAGE_PREFIX, PREFERRED_SCRIPTS
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Elements that may carry an alternate-language variant of a line
_TRANSLATION_TAGS = ("span", "translation")

_OPEN_TAG_RE = re.compile(r"<(span|translation)\b([^<>]*)>")
_LANG_ATTR_RE = re.compile(r"""\bxml:lang\s*=\s*(["'])(.*?)\1""")

_TAG_RES: Dict[str, Pattern[str]] = {
    tag: re.compile(rf"<(/?){tag}\b[^<>]*?(/?)>") for tag in _TRANSLATION_TAGS
}


def _lang_of(attributes: str) -> Optional[str]:
    match = _LANG_ATTR_RE.search(attributes)
    if match and match.group(2):
        return match.group(2)
    return None


def collect_languages(text: str) -> List[str]:
    """Return distinct ``xml:lang`` codes on span/translation tags, in document order."""
    seen: Dict[str, None] = {}
    for match in _OPEN_TAG_RE.finditer(text):
        lang = _lang_of(match.group(2))
        if lang:
            seen.setdefault(lang, None)
    return list(seen)


def _maximized_script(code: str) -> Optional[str]:
    try:
        return langcodes.Language.get(code).maximize().script
    except ValueError as e:
        logger.debug(f"Unparsable language tag {code!r}: {e}")
        return None


def choose_language(codes: List[str]) -> Optional[str]:
    """
    Pick the translation language to keep.

    Returns None when there is nothing to disambiguate (zero or one code).
    """
    if len(codes) <= 1:
        return None

    for script in PREFERRED_SCRIPTS:
        for code in codes:
            if _maximized_script(code) == script:
                return code

    for code in codes:
        if code.startswith(CHINESE_LANGUAGE_PREFIX):
            return code

    return codes[0]


def _element_end(text: str, tag: str, start: int) -> Optional[int]:
    """Find the index just past the close tag balancing an open tag ending at ``start``."""
    depth = 1
    for match in _TAG_RES[tag].finditer(text, start):
        if match.group(1):
            depth -= 1
            if depth == 0:
                return match.end()
        elif not match.group(2):
            depth += 1
    return None


def remove_other_languages(text: str, keep: str) -> str:
    """Cut out every span/translation element whose ``xml:lang`` is not ``keep``.

    Elements without a language tag are left alone. An element whose close
    tag cannot be found is kept as-is rather than truncating the document.
    """
    out: List[str] = []
    pos = 0
    while True:
        match = _OPEN_TAG_RE.search(text, pos)
        if match is None:
            break
        lang = _lang_of(match.group(2))
        if lang is None or lang == keep:
            out.append(text[pos:match.end()])
            pos = match.end()
            continue

        tag = match.group(1)
        if match.group(2).rstrip().endswith("/"):
            end: Optional[int] = match.end()
        else:
            end = _element_end(text, tag, match.end())
        if end is None:
            logger.debug(f"Unbalanced <{tag} xml:lang={lang!r}> left in place")
            out.append(text[pos:match.end()])
            pos = match.end()
            continue

        out.append(text[pos:match.start()])
        pos = end

    out.append(text[pos:])
    return "".join(out)


def clean_translations(text: str) -> str:
    """Keep a single translation language in a raw TTML document."""
    codes = collect_languages(text)
    keep = choose_language(codes)
    if keep is None:
        return text

    logger.debug(f"Translation languages {codes}; keeping {keep}")
    return remove_other_languages(text, keep)
