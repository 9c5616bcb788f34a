# quranlabs/ui.py
import math
import re
import sys
from typing import List, Optional, Sequence

import arabic_reshaper
from bidi.algorithm import get_display
from colorama import Fore, Style

from .corpus_store import CorpusStore
from .highlight import highlight_query
from .models import ChapterSummary, DisplayPreferences, SecondaryLanguage, Verse, WordToken

THEME_COLORS = {
    'red': Fore.RED,
    'white': Fore.WHITE,
    'green': Fore.GREEN,
    'blue': Fore.BLUE,
    'yellow': Fore.YELLOW,
    'magenta': Fore.MAGENTA,
    'cyan': Fore.CYAN,
}

ANSI_ESCAPE = re.compile(r'\x1B\[[0-?]*[ -/]*[@-~]')


class UI:

    def __init__(self, store: CorpusStore, term_size, preferences: DisplayPreferences):
        """
        Args:
            store: The loaded corpus, used for per-language text.
            term_size: Terminal size information (shutil.get_terminal_size()).
            preferences: Display preferences snapshot; replace it when settings change.
        """
        self.store = store
        self.term_size = term_size
        self.preferences = preferences
        self.arabic_reversed = False

    def clear_terminal(self):
        print("\033[2J", end="")
        print("\033[H", end="")
        sys.stdout.write("\033[3J")
        sys.stdout.flush()

    def accent(self) -> str:
        return THEME_COLORS.get(self.preferences.theme_color, Fore.RED)

    def toggle_arabic_reversal(self):
        self.arabic_reversed = not self.arabic_reversed
        print(f"{Fore.YELLOW}Arabic display reversal toggled: {'ON' if self.arabic_reversed else 'OFF'}{Style.RESET_ALL}")

    def fix_arabic_text(self, text: str) -> str:
        """Reshapes and applies BiDi algorithm, optionally reversing for display."""
        if not text:
            return ""
        bidi_text = str(get_display(arabic_reshaper.reshape(text)))
        if self.arabic_reversed:
            return bidi_text[::-1]
        return bidi_text

    def wrap_text(self, text: str, width: int) -> str:
        """Wrap text to specified width"""
        words = text.split()
        lines = []
        current_line = []
        current_length = 0

        for word in words:
            word_length = len(self._strip_ansi(word))
            if current_length + word_length + 1 <= width:
                current_line.append(word)
                current_length += word_length + 1
            else:
                if current_line:
                    lines.append(' '.join(current_line))
                current_line = [word]
                current_length = word_length

        if current_line:
            lines.append(' '.join(current_line))

        return '\n'.join(lines)

    def _strip_ansi(self, s: str) -> str:
        return ANSI_ESCAPE.sub('', s)

    def _print_block(self, label: str, text: str, color: str = Fore.MAGENTA):
        print(Style.BRIGHT + color + f"\n{label}:" + Style.NORMAL + Fore.WHITE)
        for line in self.wrap_text(text, max(20, self.term_size.columns - 4)).split('\n'):
            print("    " + line + Style.RESET_ALL)

    def display_single_verse(self, verse: Verse, query: str = ""):
        """
        Display one verse with the blocks enabled in the preferences.
        Search terms in `query` are highlighted in the translated texts.
        """
        prefs = self.preferences
        primary = prefs.primary_language
        print(Style.BRIGHT + Fore.GREEN + f"\n[{verse.verse_id}] " + Style.NORMAL + Fore.WHITE
              + self.store.localized(verse, "chapter_title", primary))

        if prefs.show_subtitles:
            subtitle = self.store.localized(verse, "verse_subtitle", primary)
            if subtitle:
                print(Style.BRIGHT + Fore.YELLOW + highlight_query(subtitle, query, Fore.CYAN) + Style.RESET_ALL)

        self._print_block(primary.value.capitalize(), highlight_query(self.store.primary_text(verse, primary), query))

        if prefs.secondary_language is not SecondaryLanguage.NONE:
            secondary = self.store.secondary_text(verse, prefs.secondary_language)
            if secondary:
                self._print_block(prefs.secondary_language.value.capitalize(), secondary)

        if prefs.show_arabic and verse.verse_text_arabic:
            print(Style.BRIGHT + Fore.RED + "\nArabic:" + Style.NORMAL + Fore.WHITE)
            print("    " + self.fix_arabic_text(verse.verse_text_arabic))

        if prefs.show_transliteration and verse.verse_text_transliterated:
            self._print_block("Transliteration", verse.verse_text_transliterated, Fore.RED)

        if prefs.show_footnotes:
            footnote = self.store.localized(verse, "verse_footnote", primary)
            if footnote:
                self._print_block("Footnote", highlight_query(footnote, query), Style.DIM + Fore.WHITE)

        print(Style.BRIGHT + Fore.GREEN + "\n" + "-" * min(40, self.term_size.columns))

    def paginate_output(self, verses: Sequence[Verse], title: str, query: str = "", page_size: Optional[int] = None):
        """Page through verses; Enter/n next, p previous, rev toggles Arabic reversal, q returns."""
        if not verses:
            return
        if page_size is None:
            page_size = max(1, (self.term_size.lines - 10) // 8)

        total_pages = math.ceil(len(verses) / page_size)
        current_page = 1

        while True:
            self.clear_terminal()
            print(Style.BRIGHT + self.accent() + "=" * self.term_size.columns)
            print(f"\U0001F4D6 {title}")
            print(f"Page {current_page}/{total_pages}")
            print(Style.BRIGHT + self.accent() + "=" * self.term_size.columns)

            start_idx = (current_page - 1) * page_size
            for verse in verses[start_idx:start_idx + page_size]:
                self.display_single_verse(verse, query)

            nav_options = [
                (f"{Fore.CYAN}n{Style.RESET_ALL}", "Next page"),
                (f"{Fore.CYAN}p{Style.RESET_ALL}", "Previous page"),
                (f"{Fore.MAGENTA}reverse{Style.DIM}/rev{Style.NORMAL}{Style.RESET_ALL}", "Toggle Arabic reversal"),
                (f"{Fore.RED}q{Style.RESET_ALL}", "Return"),
            ]
            max_cmd_len = max(len(self._strip_ansi(cmd)) for cmd, _ in nav_options)
            print(Fore.RED + "\n╭─ " + Style.BRIGHT + Fore.GREEN + "\U0001F9ED Navigation")
            for cmd, desc in nav_options:
                pad = " " * (max_cmd_len - len(self._strip_ansi(cmd)))
                print(Fore.RED + f"│ → {cmd}{pad} : {Style.NORMAL}{Fore.WHITE}{desc}{Style.RESET_ALL}")
            print(Fore.RED + "╰" + "─" * 26)

            try:
                choice = input(Fore.RED + "  ❯ " + Fore.WHITE).lower().strip()
            except (KeyboardInterrupt, EOFError):
                return

            if choice == 'n' and current_page < total_pages:
                current_page += 1
            elif choice == 'p' and current_page > 1:
                current_page -= 1
            elif choice in ['reverse', 'rev']:
                self.toggle_arabic_reversal()
            elif choice == 'q':
                return
            elif not choice:
                if current_page < total_pages:
                    current_page += 1
                else:
                    return

    def display_chapter_list(self, chapters: Sequence[ChapterSummary]):
        """Display chapter titles in columns."""
        primary = self.preferences.primary_language
        columns = max(1, self.term_size.columns // 32)
        rows = (len(chapters) + columns - 1) // columns

        order = "revelation order" if self.preferences.sort_chapters_by_revelation_order else "chapter number"
        print(Fore.GREEN + Style.BRIGHT + f"Chapters (by {order}):")
        print(Fore.CYAN + "-" * 25)
        for i in range(rows):
            row_output = []
            for j in range(columns):
                index = i + j * rows
                if index < len(chapters):
                    chapter = chapters[index]
                    cell = f"{chapter.chapter_number:3d}. {chapter.title(primary)}"
                    row_output.append(Fore.GREEN + cell[:30].ljust(32))
            print("".join(row_output))
        print(Fore.CYAN + "-" * 25 + Style.RESET_ALL)

    def display_word_tokens(self, tokens: Sequence[WordToken]):
        """One line per word: index, Arabic, transliteration, English and root."""
        for token in tokens:
            print(
                Fore.GREEN + f"{token.verse_id:>8} #{token.word_index:<3}"
                + Fore.WHITE + f" {self.fix_arabic_text(token.arabic_text)}"
                + Fore.CYAN + f"  {token.transliterated_text}"
                + Fore.WHITE + f"  {token.english_text}"
                + Style.DIM + f"  (root: {token.root_word})" + Style.RESET_ALL
            )
            if token.meanings:
                print(Style.DIM + "      " + token.meanings + Style.RESET_ALL)

    def display_suggestions(self, suggestions: List[ChapterSummary]):
        primary = self.preferences.primary_language
        print(Fore.RED + "╭─" + Style.BRIGHT + Fore.MAGENTA + "🤔 Did you mean one of these?")
        for chapter in suggestions:
            print(f"{Fore.RED}├ {Fore.CYAN}{chapter.title(primary)} {Style.DIM}{Fore.WHITE}(Chapter {chapter.chapter_number}){Style.RESET_ALL}")
        print(Fore.RED + "╰" + "─" * 38 + Style.RESET_ALL)
