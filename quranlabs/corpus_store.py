# quranlabs/corpus_store.py
import os
import json
import sys
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from colorama import Fore, Style
from pydantic import ValidationError

from .models import (
    ChapterSummary,
    FOREIGN_LANGUAGES,
    ForeignVerse,
    Language,
    SecondaryLanguage,
    Verse,
    WordToken,
)
from .utils import get_data_dir

LOCALIZED_FIELDS = ("verse_text", "verse_subtitle", "verse_footnote", "chapter_title")


class CorpusLoadError(Exception):
    """The corpus could not be read or decoded. Fatal at startup."""


class CorpusStore:
    """
    Immutable, indexed view of the verse corpus.

    All indices are built once in the constructor; every accessor is a plain
    dictionary lookup returning tuples, so one store can be shared between
    threads without locking.
    """

    MAIN_FILENAME = "quran.json"
    FOREIGN_FILENAME = "quran-foreign.json"
    WORD_BY_WORD_FILENAME = "quran-word-by-word.json"

    def __init__(self, verses: List[Verse], foreign: List[ForeignVerse], words: List[WordToken]):
        self._verses: Tuple[Verse, ...] = tuple(verses)

        self._by_id: Dict[str, Verse] = {}
        self._by_key: Dict[str, Verse] = {}
        by_chapter: Dict[int, List[Verse]] = defaultdict(list)
        for verse in self._verses:
            if verse.verse_id in self._by_id:
                raise CorpusLoadError(f"Duplicate verse_id '{verse.verse_id}' in corpus")
            key = self._key(verse.chapter_number, verse.verse_number)
            if key in self._by_key:
                raise CorpusLoadError(
                    f"Verse {verse.chapter_number}:{verse.verse_number} appears twice "
                    f"('{self._by_key[key].verse_id}' and '{verse.verse_id}')"
                )
            self._by_id[verse.verse_id] = verse
            self._by_key[key] = verse
            by_chapter[verse.chapter_number].append(verse)
        self._by_chapter: Dict[int, Tuple[Verse, ...]] = {
            chapter: tuple(sorted(items, key=lambda v: v.verse_number))
            for chapter, items in by_chapter.items()
        }
        for chapter, items in self._by_chapter.items():
            numbers = [v.verse_number for v in items]
            if numbers != list(range(1, items[0].chapter_verses + 1)):
                raise CorpusLoadError(
                    f"Chapter {chapter} verses must be numbered 1..{items[0].chapter_verses} without gaps"
                )

        self._foreign: Dict[str, ForeignVerse] = {}
        for record in foreign:
            if record.verse_id not in self._by_id:
                raise CorpusLoadError(f"Foreign record references unknown verse '{record.verse_id}'")
            self._foreign[record.verse_id] = record

        words_by_verse: Dict[str, List[WordToken]] = defaultdict(list)
        words_by_root: Dict[str, List[WordToken]] = defaultdict(list)
        for token in words:
            if token.verse_id not in self._by_id:
                raise CorpusLoadError(f"Word token references unknown verse '{token.verse_id}'")
            words_by_verse[token.verse_id].append(token)
            words_by_root[token.root_word].append(token)
        # sorted() is stable, so equal word_index keeps input order
        self._words_by_verse: Dict[str, Tuple[WordToken, ...]] = {
            verse_id: tuple(sorted(tokens, key=lambda t: t.word_index))
            for verse_id, tokens in words_by_verse.items()
        }
        self._words_by_root: Dict[str, Tuple[WordToken, ...]] = {
            root: tuple(tokens) for root, tokens in words_by_root.items()
        }

        self._chapters: Tuple[ChapterSummary, ...] = self._build_chapters()
        self._chapter_by_number: Dict[int, ChapterSummary] = {c.chapter_number: c for c in self._chapters}

    # --- Construction ---

    @classmethod
    def from_records(cls, main: List[dict], foreign: List[dict], words: List[dict]) -> "CorpusStore":
        """Build a store from decoded JSON records, validating every record."""
        try:
            verses = [Verse.model_validate(record) for record in main]
            foreign_verses = [ForeignVerse.model_validate(record) for record in foreign]
            tokens = [WordToken.model_validate(record) for record in words]
        except ValidationError as e:
            raise CorpusLoadError(f"Corpus record failed validation: {e}") from e
        return cls(verses, foreign_verses, tokens)

    @classmethod
    def load(cls, data_dir: Optional[str] = None, verbose: bool = False) -> "CorpusStore":
        """Load the three corpus files from `data_dir` (default: see utils.get_data_dir)."""
        data_dir = data_dir or get_data_dir()
        main = cls._load_json(os.path.join(data_dir, cls.MAIN_FILENAME), "main")
        foreign = cls._load_json(os.path.join(data_dir, cls.FOREIGN_FILENAME), "foreign")
        words = cls._load_json(os.path.join(data_dir, cls.WORD_BY_WORD_FILENAME), "word-by-word")
        store = cls.from_records(main, foreign, words)
        if verbose:
            print(f"{Fore.GREEN}Successfully loaded {len(store.all_verses())} verses from {data_dir}.{Style.RESET_ALL}")
        return store

    @staticmethod
    def _load_json(path: str, db_name: str) -> List[dict]:
        """Read one corpus file; it must hold a JSON array of objects."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise CorpusLoadError(f"Quran {db_name} database not found at {path}") from e
        except json.JSONDecodeError as e:
            raise CorpusLoadError(f"Failed to parse Quran {db_name} database file ({path}): {e}") from e
        except OSError as e:
            raise CorpusLoadError(f"Could not read Quran {db_name} database file ({path}): {e}") from e

        if not isinstance(data, list):
            raise CorpusLoadError(f"Quran {db_name} database ({path}) must contain a JSON array")
        return data

    def _build_chapters(self) -> Tuple[ChapterSummary, ...]:
        chapters = []
        for chapter_number in sorted(self._by_chapter):
            first = self._by_chapter[chapter_number][0]
            foreign = self._foreign.get(first.verse_id)
            titles = {}
            if foreign:
                for lang in FOREIGN_LANGUAGES:
                    title = getattr(foreign, f"chapter_title_{lang.value}")
                    if title:
                        titles[lang.value] = title
            chapters.append(ChapterSummary(
                chapter_number=chapter_number,
                revelation_order=first.chapter_revelation_order,
                chapter_verses=first.chapter_verses,
                chapter_title_english=first.chapter_title_english,
                chapter_title_arabic=first.chapter_title_arabic,
                chapter_title_transliterated=first.chapter_title_transliterated,
                foreign_titles=titles,
            ))
        return tuple(chapters)

    @staticmethod
    def _key(chapter: int, number: int) -> str:
        return f"{chapter}-{number}"

    # --- Lookups ---

    def all_verses(self) -> Tuple[Verse, ...]:
        return self._verses

    def verse_by_id(self, verse_id: str) -> Optional[Verse]:
        return self._by_id.get(verse_id)

    def verse(self, chapter: int, number: int) -> Optional[Verse]:
        return self._by_key.get(self._key(chapter, number))

    def verses_in_chapter(self, chapter: int) -> Tuple[Verse, ...]:
        """Verses of `chapter` in ascending verse order; empty for unknown chapters."""
        return self._by_chapter.get(chapter, ())

    def word_tokens_for_verse(self, verse_id: str) -> Tuple[WordToken, ...]:
        return self._words_by_verse.get(verse_id, ())

    def word_tokens_for_root(self, root: str) -> Tuple[WordToken, ...]:
        """Tokens sharing `root`, in corpus input order."""
        return self._words_by_root.get(root, ())

    def chapters(self, sort_by_revelation_order: bool = False) -> Tuple[ChapterSummary, ...]:
        if sort_by_revelation_order:
            return tuple(sorted(self._chapters, key=lambda c: c.revelation_order))
        return self._chapters

    def chapter(self, number: int) -> Optional[ChapterSummary]:
        return self._chapter_by_number.get(number)

    # --- Per-language text ---

    def localized(self, verse: Verse, field: str, language: Language = Language.ENGLISH) -> Optional[str]:
        """
        Value of `field` for `language`, falling back to English.

        Args:
            verse: The verse to read from.
            field: One of LOCALIZED_FIELDS.
            language: Requested language.

        Returns:
            The foreign value when the overlay has one, otherwise the English
            value (which may itself be None for subtitles and footnotes).
        """
        if field not in LOCALIZED_FIELDS:
            raise ValueError(f"Unknown localized field '{field}'")
        english = getattr(verse, f"{field}_english")
        if language is Language.ENGLISH:
            return english
        foreign = self._foreign.get(verse.verse_id)
        if foreign is None:
            return english
        value = getattr(foreign, f"{field}_{language.value}")
        return value if value is not None else english

    def primary_text(self, verse: Verse, language: Language = Language.ENGLISH) -> str:
        return self.localized(verse, "verse_text", language) or ""

    def secondary_text(self, verse: Verse, language: SecondaryLanguage) -> Optional[str]:
        """Body text for the secondary language. No English fallback: absence stays None."""
        if language is SecondaryLanguage.NONE:
            return None
        if language is SecondaryLanguage.ENGLISH:
            return verse.verse_text_english
        foreign = self._foreign.get(verse.verse_id)
        if foreign is None:
            return None
        return getattr(foreign, f"verse_text_{language.value}")


def load_or_exit(data_dir: Optional[str] = None, verbose: bool = False) -> CorpusStore:
    """Load the corpus for a command-line run; a broken corpus ends the process."""
    try:
        return CorpusStore.load(data_dir, verbose=verbose)
    except CorpusLoadError as e:
        print(f"{Fore.RED}Fatal Error: {e}{Style.RESET_ALL}", file=sys.stderr)
        sys.exit(1)
