# quranlabs/formatter.py
from typing import List, Optional, Sequence

from .corpus_store import CorpusStore
from .models import DisplayPreferences, SecondaryLanguage, Verse


def format_verses_to_text(store: CorpusStore, verses: Sequence[Verse], preferences: Optional[DisplayPreferences] = None) -> str:
    """
    Flatten verses into plain text for copying or sharing.

    Per verse, blocks are emitted in this order and separated by a blank line:
    subtitle, "[id] primary body", "[id] secondary body", Arabic,
    transliteration, footnote. Blocks that are switched off or have no text
    are left out.
    """
    preferences = preferences or DisplayPreferences()
    primary = preferences.primary_language
    blocks: List[str] = []

    for verse in verses:
        if preferences.show_subtitles:
            subtitle = store.localized(verse, "verse_subtitle", primary)
            if subtitle:
                blocks.append(subtitle)

        blocks.append(f"[{verse.verse_id}] {store.primary_text(verse, primary)}")

        if preferences.secondary_language is not SecondaryLanguage.NONE:
            secondary = store.secondary_text(verse, preferences.secondary_language)
            if secondary:
                blocks.append(f"[{verse.verse_id}] {secondary}")

        if preferences.show_arabic and verse.verse_text_arabic:
            blocks.append(verse.verse_text_arabic)

        if preferences.show_transliteration and verse.verse_text_transliterated:
            blocks.append(verse.verse_text_transliterated)

        if preferences.show_footnotes:
            footnote = store.localized(verse, "verse_footnote", primary)
            if footnote:
                blocks.append(footnote)

    return "\n\n".join(blocks).strip()
