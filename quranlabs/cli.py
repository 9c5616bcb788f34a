# quranlabs/cli.py
import argparse
import shutil
import sys
from typing import List, Optional

from colorama import Fore, Style, init

from . import __version__
from .corpus_store import CorpusStore, load_or_exit
from .data_api import SEARCH_RESULT_LIMIT, DataAPI, describe_count
from .formatter import format_verses_to_text
from .models import Verse
from .query import InvalidQuery, ParsedQuery, SearchQuery
from .query_parser import parse
from .settings_manager import SettingsManager
from .ui import UI

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_NO_RESULTS = 2

COMMANDS = [
    ("2:255, 18:1-10, 36", "Verse, range or whole chapter"),
    ("2:1,2:5", "Several verses of one chapter"),
    ("any words", "Search the translation"),
    ("/<words>", "Search words that start like a command"),
    ("random verse/chapter", "Something to read"),
    ("find <name>", "Find a chapter by name"),
    ("words <c:v>", "Word-by-word breakdown"),
    ("root <root>", "Words sharing a root"),
    ("list/ls", "List chapters"),
    ("copy/cp", "Print last results as plain text"),
    ("settings/st", "Display settings"),
    ("info/i", "Show this help"),
    ("quit/q", "Exit"),
]


class QuranLabsApp:
    def __init__(self, store: CorpusStore, settings: SettingsManager):
        self.store = store
        self.settings = settings
        self.api = DataAPI(store, settings.preferences)
        self.ui = UI(store, shutil.get_terminal_size(), settings.preferences)
        self.last_results: List[Verse] = []

    def _sync_preferences(self):
        self.api.preferences = self.settings.preferences
        self.ui.preferences = self.settings.preferences

    def _display_info(self):
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + f"📜 QuranLabs v{__version__}")
        width = max(len(cmd) for cmd, _ in COMMANDS)
        for cmd, desc in COMMANDS:
            print(Fore.RED + f"│ → {Fore.CYAN}{cmd.ljust(width)}{Fore.WHITE} : {Style.DIM}{desc}{Style.RESET_ALL}")
        print(Fore.RED + "╰" + "─" * 38 + Style.RESET_ALL)

    def handle_command(self, user_input: str) -> bool:
        """
        Run one line of input. Returns False when the user asked to quit.

        A leading "/" skips command matching, so "/words of mercy" searches
        for "words of mercy" instead of running the words command.
        """
        if user_input.lstrip().startswith("/"):
            self.run_query(user_input.lstrip()[1:])
            return True
        lowered = user_input.strip().lower()
        head, _, rest = lowered.partition(" ")
        rest = rest.strip()
        prefs = self.settings.preferences

        if lowered in ['quit', 'exit', 'q']:
            print(Fore.RED + "\n✨ As-salamu alaykum! Thank you for using QuranLabs!")
            return False
        elif lowered in ['info', 'i', 'help']:
            self._display_info()
        elif lowered in ['list', 'ls']:
            self.ui.display_chapter_list(self.store.chapters(prefs.sort_chapters_by_revelation_order))
        elif lowered in ['settings', 'st']:
            self.settings.show_settings_menu()
            self._sync_preferences()
        elif lowered in ['copy', 'cp']:
            if self.last_results:
                print(format_verses_to_text(self.store, self.last_results, prefs))
            else:
                print(Fore.YELLOW + "Nothing to copy yet.")
        elif lowered in ['reverse', 'rev']:
            self.ui.toggle_arabic_reversal()
        elif head == 'find' and rest:
            suggestions = self.api.suggest_chapters(rest, prefs.primary_language)
            if suggestions:
                self.ui.display_suggestions(suggestions)
            else:
                print(Fore.YELLOW + f"No chapter name resembles '{rest}'.")
        elif head == 'words' and rest:
            tokens = self.store.word_tokens_for_verse(rest.replace(" ", ""))
            if tokens:
                self.ui.display_word_tokens(tokens)
            else:
                print(Fore.YELLOW + f"No word-by-word data for '{rest}'.")
        elif head == 'root' and rest:
            tokens = self.store.word_tokens_for_root(rest)
            if tokens:
                print(Fore.GREEN + f"{len(tokens)} word(s) with root '{rest}':")
                self.ui.display_word_tokens(tokens)
            else:
                print(Fore.YELLOW + f"No words with root '{rest}'.")
        else:
            self.run_query(user_input)
        return True

    def run_query(self, user_input: str):
        query = parse(user_input, self.settings.preferences.primary_language)
        if isinstance(query, InvalidQuery):
            print(Fore.RED + f"Invalid query: {query.reason}")
            return

        results = self.api.evaluate(query)
        if not results:
            print(Fore.YELLOW + "No results found.")
            return

        self.last_results = results
        highlight = query.term if isinstance(query, SearchQuery) else ""
        self.ui.paginate_output(results, _title_for(query, results), query=highlight)

    def run(self):
        self._display_info()
        while True:
            try:
                user_input = input(Style.BRIGHT + Fore.GREEN + "\nEnter query or command:" + Style.RESET_ALL
                                   + Fore.RED + "\n  ❯ " + Fore.WHITE)
            except KeyboardInterrupt:
                print(Fore.YELLOW + "\n⚠ Interrupted! Type 'quit' to exit.")
                continue
            except EOFError:
                return
            if not self.handle_command(user_input):
                return


def _title_for(query: ParsedQuery, results: List[Verse]) -> str:
    if isinstance(query, SearchQuery):
        return f"Search '{query.term}': {describe_count(results)} result(s)"
    if len(results) == 1:
        return f"Verse {results[0].verse_id}"
    first = results[0]
    if all(v.chapter_number == first.chapter_number for v in results):
        return f"Chapter {first.chapter_number}: {first.chapter_title_english} ({len(results)} verses)"
    return f"{len(results)} verses"


def run_once(store: CorpusStore, settings: SettingsManager, text: str) -> int:
    """Evaluate one query and print plain text; returns the process exit status."""
    preferences = settings.preferences
    query = parse(text, preferences.primary_language)
    if isinstance(query, InvalidQuery):
        print(f"{Fore.RED}Invalid query: {query.reason}{Style.RESET_ALL}", file=sys.stderr)
        return EXIT_INVALID

    results = DataAPI(store, preferences).evaluate(query)
    if not results:
        print(f"{Fore.YELLOW}No results found.{Style.RESET_ALL}", file=sys.stderr)
        return EXIT_NO_RESULTS

    print(format_verses_to_text(store, results, preferences))
    if isinstance(query, SearchQuery) and len(results) >= SEARCH_RESULT_LIMIT:
        print(f"{Fore.YELLOW}Showing the first {SEARCH_RESULT_LIMIT} matches ({describe_count(results)}).{Style.RESET_ALL}", file=sys.stderr)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quranlabs",
        description="Read and search the Quran from the terminal. Without a query, starts the interactive reader.",
    )
    parser.add_argument("query", nargs="*", help="Reference or search words, e.g. '2:255', '18:1-10' or 'mercy'.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = SettingsManager()
    if args.query:
        store = load_or_exit()
        return run_once(store, settings, " ".join(args.query))

    # autoreset only for the interactive reader; one-shot output stays plain
    init(autoreset=True)
    store = load_or_exit(verbose=True)
    app = QuranLabsApp(store, settings)
    app.run()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
