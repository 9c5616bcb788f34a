# quranlabs/query_parser.py
import re
from typing import List

from .models import Language
from .query import (
    ChapterQuery,
    InvalidQuery,
    MultipleVersesQuery,
    ParsedQuery,
    RandomChapterQuery,
    RandomVerseQuery,
    SearchQuery,
    VerseQuery,
    VerseRangeQuery,
)

# Patterns are tried in this order; the first match wins.
CHAPTER_ONLY = re.compile(r"^(\d+)$", re.ASCII)
SINGLE_VERSE = re.compile(r"^(\d+)[:\s]+(\d+)$", re.ASCII)
VERSE_RANGE = re.compile(r"^(\d+)[:\s]+(\d+)[-\s]+(\d+)$", re.ASCII)
VERSE_LIST = re.compile(r"^(?:\d+:\d+(?:-\d+)?\s*,\s*)*\d+:\d+(?:-\d+)?$", re.ASCII)

LIST_VERSE = re.compile(r"^(\d+):(\d+)$", re.ASCII)
LIST_RANGE = re.compile(r"^(\d+):(\d+)-(\d+)$", re.ASCII)

KEYWORDS = {
    "random chapter": RandomChapterQuery,
    "random verse": RandomVerseQuery,
}


class _BadNumber(Exception):
    pass


MAX_NUMBER = 2 ** 63 - 1


def _to_int(text: str) -> int:
    # References are bounded to a signed 64-bit value
    text = text.lstrip("0") or "0"
    if len(text) > len(str(MAX_NUMBER)):
        raise _BadNumber(text)
    value = int(text)
    if value > MAX_NUMBER:
        raise _BadNumber(text)
    return value


def parse(text: str, default_language: Language = Language.ENGLISH) -> ParsedQuery:
    """
    Classify a raw query string.

    Args:
        text: What the user typed, e.g. "2:255", "18:1-10", "light darkness".
        default_language: Language attached to the fallback search query.

    Returns:
        Exactly one ParsedQuery variant. Never raises; problems come back
        as InvalidQuery.
    """
    trimmed = text.strip().lower()
    if not trimmed:
        return InvalidQuery(reason="Empty query")

    try:
        return _classify(trimmed, default_language)
    except _BadNumber as e:
        return InvalidQuery(reason=f"Invalid number: {str(e)[:20]}")


def _classify(trimmed: str, default_language: Language) -> ParsedQuery:
    match = CHAPTER_ONLY.match(trimmed)
    if match:
        return ChapterQuery(chapter=_to_int(match.group(1)))

    match = SINGLE_VERSE.match(trimmed)
    if match:
        return VerseQuery(chapter=_to_int(match.group(1)), verse=_to_int(match.group(2)))

    match = VERSE_RANGE.match(trimmed)
    if match:
        chapter, start, end = (_to_int(g) for g in match.groups())
        return VerseRangeQuery(chapter=chapter, start=start, end=end)

    if VERSE_LIST.match(trimmed):
        return _parse_list(trimmed)

    keyword = KEYWORDS.get(trimmed)
    if keyword:
        return keyword()

    return SearchQuery(term=trimmed, language=default_language, fuzzy=True)


def _parse_list(trimmed: str) -> ParsedQuery:
    """
    Comma-separated references. Only a list of single verses from one chapter
    is accepted; ranges inside a list or several chapters are rejected.
    """
    parsed: List[ParsedQuery] = []
    for segment in (s.strip() for s in trimmed.split(",")):
        match = LIST_VERSE.match(segment)
        if match:
            parsed.append(VerseQuery(chapter=_to_int(match.group(1)), verse=_to_int(match.group(2))))
            continue
        match = LIST_RANGE.match(segment)
        if match:
            chapter, start, end = (_to_int(g) for g in match.groups())
            parsed.append(VerseRangeQuery(chapter=chapter, start=start, end=end))
            continue
        return InvalidQuery(reason=f"Invalid sub-query: {segment}")

    if all(isinstance(q, VerseQuery) for q in parsed):
        chapters = {q.chapter for q in parsed}
        if len(chapters) == 1:
            return MultipleVersesQuery(chapter=chapters.pop(), verses=tuple(q.verse for q in parsed))

    return InvalidQuery(reason="Multiple chapters or ranges not supported in multipleVerses")
