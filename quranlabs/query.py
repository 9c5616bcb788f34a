# quranlabs/query.py
from enum import Enum
from typing import Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict

from .models import Language


class QueryType(str, Enum):
    """Tag carried by every ParsedQuery variant."""
    VERSE = "verse"
    VERSE_RANGE = "verseRange"
    MULTIPLE_VERSES = "multipleVerses"
    CHAPTER = "chapter"
    SEARCH = "search"
    RANDOM_CHAPTER = "randomChapter"
    RANDOM_VERSE = "randomVerse"
    INVALID = "invalid"


class _Query(BaseModel):
    model_config = ConfigDict(frozen=True)


class VerseQuery(_Query):
    type: Literal[QueryType.VERSE] = QueryType.VERSE
    chapter: int
    verse: int


class VerseRangeQuery(_Query):
    # start > end is allowed here; evaluation yields nothing for it
    type: Literal[QueryType.VERSE_RANGE] = QueryType.VERSE_RANGE
    chapter: int
    start: int
    end: int


class MultipleVersesQuery(_Query):
    type: Literal[QueryType.MULTIPLE_VERSES] = QueryType.MULTIPLE_VERSES
    chapter: int
    verses: Tuple[int, ...]


class ChapterQuery(_Query):
    type: Literal[QueryType.CHAPTER] = QueryType.CHAPTER
    chapter: int


class SearchQuery(_Query):
    type: Literal[QueryType.SEARCH] = QueryType.SEARCH
    term: str
    language: Language = Language.ENGLISH
    fuzzy: bool = True


class RandomChapterQuery(_Query):
    type: Literal[QueryType.RANDOM_CHAPTER] = QueryType.RANDOM_CHAPTER


class RandomVerseQuery(_Query):
    type: Literal[QueryType.RANDOM_VERSE] = QueryType.RANDOM_VERSE


class InvalidQuery(_Query):
    type: Literal[QueryType.INVALID] = QueryType.INVALID
    reason: str


ParsedQuery = Union[
    VerseQuery,
    VerseRangeQuery,
    MultipleVersesQuery,
    ChapterQuery,
    SearchQuery,
    RandomChapterQuery,
    RandomVerseQuery,
    InvalidQuery,
]
