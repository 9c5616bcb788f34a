# quranlabs/models.py
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class Language(str, Enum):
    """Languages a verse body can be read in (primary language)."""
    ENGLISH = "english"
    TURKISH = "turkish"
    FRENCH = "french"
    GERMAN = "german"
    BAHASA = "bahasa"
    PERSIAN = "persian"
    TAMIL = "tamil"
    SWEDISH = "swedish"
    RUSSIAN = "russian"


class SecondaryLanguage(str, Enum):
    NONE = "none"
    ENGLISH = "english"
    TURKISH = "turkish"
    FRENCH = "french"
    GERMAN = "german"
    BAHASA = "bahasa"
    PERSIAN = "persian"
    TAMIL = "tamil"
    SWEDISH = "swedish"
    RUSSIAN = "russian"


# Everything except English lives in the foreign overlay file
FOREIGN_LANGUAGES = tuple(lang for lang in Language if lang is not Language.ENGLISH)


class Verse(BaseModel):
    model_config = ConfigDict(frozen=True)

    verse_id: str                   # e.g. "2:255"
    verse_id_arabic: str = ""
    chapter_number: int
    verse_number: int
    verse_index: int                # position in the whole corpus
    verse_index_numbered: Optional[int] = None
    chapter_verses: int
    chapter_revelation_order: int

    chapter_title_english: str
    chapter_title_arabic: str = ""
    chapter_title_transliterated: str = ""

    verse_text_english: str
    verse_text_arabic: str = ""
    verse_text_arabic_clean: str = ""
    verse_text_transliterated: str = ""

    verse_subtitle_english: Optional[str] = None
    verse_footnote_english: Optional[str] = None


class ForeignVerse(BaseModel):
    """Foreign-language overlay for one verse, keyed by verse_id."""
    model_config = ConfigDict(frozen=True)

    verse_id: str

    # Chapter titles
    chapter_title_turkish: Optional[str] = None
    chapter_title_french: Optional[str] = None
    chapter_title_german: Optional[str] = None
    chapter_title_bahasa: Optional[str] = None
    chapter_title_persian: Optional[str] = None
    chapter_title_tamil: Optional[str] = None
    chapter_title_swedish: Optional[str] = None
    chapter_title_russian: Optional[str] = None

    # Verse text
    verse_text_turkish: Optional[str] = None
    verse_text_french: Optional[str] = None
    verse_text_german: Optional[str] = None
    verse_text_bahasa: Optional[str] = None
    verse_text_persian: Optional[str] = None
    verse_text_tamil: Optional[str] = None
    verse_text_swedish: Optional[str] = None
    verse_text_russian: Optional[str] = None

    # Verse subtitle
    verse_subtitle_turkish: Optional[str] = None
    verse_subtitle_french: Optional[str] = None
    verse_subtitle_german: Optional[str] = None
    verse_subtitle_bahasa: Optional[str] = None
    verse_subtitle_persian: Optional[str] = None
    verse_subtitle_tamil: Optional[str] = None
    verse_subtitle_swedish: Optional[str] = None
    verse_subtitle_russian: Optional[str] = None

    # Verse footnote
    verse_footnote_turkish: Optional[str] = None
    verse_footnote_french: Optional[str] = None
    verse_footnote_german: Optional[str] = None
    verse_footnote_bahasa: Optional[str] = None
    verse_footnote_persian: Optional[str] = None
    verse_footnote_tamil: Optional[str] = None
    verse_footnote_swedish: Optional[str] = None
    verse_footnote_russian: Optional[str] = None


class WordToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    verse_id: str
    word_index: int
    global_index: int

    root_word: str
    english_text: str
    arabic_text: str
    transliterated_text: str

    meanings: str


class ChapterSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    chapter_number: int
    revelation_order: int
    chapter_verses: int
    chapter_title_english: str
    chapter_title_arabic: str
    chapter_title_transliterated: str
    foreign_titles: Dict[str, str] = {}   # language value -> title

    def title(self, language: Language = Language.ENGLISH) -> str:
        """Chapter title in `language`, English when no foreign title exists."""
        if language is Language.ENGLISH:
            return self.chapter_title_english
        return self.foreign_titles.get(language.value) or self.chapter_title_english


class DisplayPreferences(BaseModel):
    """Snapshot of the reader's display toggles, passed explicitly into formatting and search."""
    model_config = ConfigDict(frozen=True)

    show_subtitles: bool = True
    show_footnotes: bool = True
    show_arabic: bool = False
    show_transliteration: bool = False
    primary_language: Language = Language.ENGLISH
    secondary_language: SecondaryLanguage = SecondaryLanguage.NONE
    sort_chapters_by_revelation_order: bool = False
    theme_color: str = "red"
