# quranlabs/data_api.py
import difflib
import random
from typing import List, Optional, Sequence, Tuple

from .corpus_store import CorpusStore
from .models import ChapterSummary, DisplayPreferences, Language, Verse
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

SEARCH_RESULT_LIMIT = 500
MIN_QUERY_LENGTH = 3
TOTAL_CHAPTERS = 114


def describe_count(results: Sequence[Verse]) -> str:
    """Result count for display; a capped search reads "500+"."""
    if len(results) >= SEARCH_RESULT_LIMIT:
        return f"{SEARCH_RESULT_LIMIT}+"
    return str(len(results))


class DataAPI:
    """Evaluates parsed queries against a CorpusStore. Never raises, never mutates."""

    def __init__(self, store: CorpusStore, preferences: Optional[DisplayPreferences] = None, rng: Optional[random.Random] = None):
        """
        Args:
            store: The loaded corpus.
            preferences: Default snapshot deciding whether subtitles and
                footnotes take part in searches.
            rng: Random source for the random chapter/verse queries.
        """
        self.store = store
        self.preferences = preferences or DisplayPreferences()
        self.rng = rng or random.Random()

    def evaluate(self, query: ParsedQuery, preferences: Optional[DisplayPreferences] = None) -> List[Verse]:
        if isinstance(query, VerseQuery):
            return self.fetch_verse(query.chapter, query.verse)
        if isinstance(query, VerseRangeQuery):
            return self.fetch_range(query.chapter, query.start, query.end)
        if isinstance(query, MultipleVersesQuery):
            return self.fetch_multiple(query.chapter, query.verses)
        if isinstance(query, ChapterQuery):
            return self.fetch_chapter(query.chapter)
        if isinstance(query, SearchQuery):
            return self.search(query.term, query.language, query.fuzzy, preferences)
        if isinstance(query, RandomChapterQuery):
            return self.random_chapter()
        if isinstance(query, RandomVerseQuery):
            verse = self.random_verse()
            return [verse] if verse else []
        if isinstance(query, InvalidQuery):
            return []
        raise TypeError(f"Unhandled query variant: {type(query).__name__}")

    def fetch_verse(self, chapter: int, verse: int) -> List[Verse]:
        found = self.store.verse(chapter, verse)
        return [found] if found else []

    def fetch_range(self, chapter: int, start: int, end: int) -> List[Verse]:
        # Inclusive membership test; start > end simply matches nothing
        return [v for v in self.store.verses_in_chapter(chapter) if start <= v.verse_number <= end]

    def fetch_multiple(self, chapter: int, verses: Sequence[int]) -> List[Verse]:
        wanted = set(verses)
        return [v for v in self.store.verses_in_chapter(chapter) if v.verse_number in wanted]

    def fetch_chapter(self, chapter: int) -> List[Verse]:
        return list(self.store.verses_in_chapter(chapter))

    def search(self, term: str, language: Language = Language.ENGLISH, fuzzy: bool = True,
               preferences: Optional[DisplayPreferences] = None) -> List[Verse]:
        """
        Substring search over the corpus in corpus order, stopping at SEARCH_RESULT_LIMIT.

        Fuzzy mode requires every space-separated word of the query to occur
        somewhere in one field; exact mode requires the whole query as one
        contiguous substring. The primary body is always checked; subtitles
        and footnotes only when the preferences show them.
        """
        preferences = preferences or self.preferences
        query = term.strip().lower()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        words = [w for w in query.split(" ") if w]

        def matches(text: str) -> bool:
            if fuzzy:
                return all(word in text for word in words)
            return query in text

        results: List[Verse] = []
        for verse in self.store.all_verses():
            fields = [self.store.primary_text(verse, language)]
            if preferences.show_subtitles:
                fields.append(self.store.localized(verse, "verse_subtitle", language) or "")
            if preferences.show_footnotes:
                fields.append(self.store.localized(verse, "verse_footnote", language) or "")

            if any(matches(text.lower()) for text in fields if text):
                results.append(verse)
                if len(results) >= SEARCH_RESULT_LIMIT:
                    break
        return results

    def random_chapter(self) -> List[Verse]:
        return self.fetch_chapter(self.rng.randint(1, TOTAL_CHAPTERS))

    def random_verse(self) -> Optional[Verse]:
        verses = self.store.all_verses()
        if not verses:
            return None
        return self.rng.choice(verses)

    def suggest_chapters(self, name: str, language: Language = Language.ENGLISH, limit: int = 5) -> List[ChapterSummary]:
        """Chapters whose title is close to `name` (difflib ratio >= 0.5), best first."""
        name = name.strip().lower()
        if not name:
            return []

        candidates: List[Tuple[str, ChapterSummary]] = []
        for chapter in self.store.chapters():
            titles = {chapter.chapter_title_english, chapter.chapter_title_transliterated, chapter.title(language)}
            candidates.extend((title.lower(), chapter) for title in titles if title)

        close = difflib.get_close_matches(name, [title for title, _ in candidates], n=len(candidates), cutoff=0.5)
        suggestions: List[ChapterSummary] = []
        for match in close:
            for title, chapter in candidates:
                if title == match and chapter not in suggestions:
                    suggestions.append(chapter)
            if len(suggestions) >= limit:
                break
        return suggestions[:limit]
