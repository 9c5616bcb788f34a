# quranlabs/settings_manager.py
import json
import os
import sys
from typing import Optional

from colorama import Fore, Style
from pydantic import ValidationError

from .models import DisplayPreferences, Language, SecondaryLanguage
from .ui import THEME_COLORS
from .utils import get_config_path

PREF_FILENAME = "QuranLabs-Settings.json"

BOOLEAN_SETTINGS = {
    "subtitles": "show_subtitles",
    "footnotes": "show_footnotes",
    "arabic": "show_arabic",
    "transliteration": "show_transliteration",
    "revelation": "sort_chapters_by_revelation_order",
}


class SettingsManager:
    """Loads, edits and saves the display preferences file."""

    def __init__(self, preferences_file: Optional[str] = None):
        if preferences_file is None:
            try:
                preferences_file = get_config_path(PREF_FILENAME)
            except OSError as e_path:
                print(f"{Fore.RED}Critical Error determining preferences path: {e_path}", file=sys.stderr)
                print(f"{Fore.YELLOW}Preferences may not save correctly.{Style.RESET_ALL}", file=sys.stderr)
        self.preferences_file = preferences_file
        self.preferences = self.load()

    def load(self) -> DisplayPreferences:
        """Read preferences from disk; missing or broken files give the defaults."""
        if not self.preferences_file:
            return DisplayPreferences()
        try:
            with open(self.preferences_file, 'r', encoding='utf-8') as f:
                return DisplayPreferences.model_validate(json.load(f))
        except FileNotFoundError:
            return DisplayPreferences()
        except (json.JSONDecodeError, ValidationError):
            print(f"{Fore.YELLOW}Preferences file '{self.preferences_file}' is corrupted, resetting.{Style.RESET_ALL}", file=sys.stderr)
            return DisplayPreferences()
        except OSError as e:
            print(f"{Fore.RED}Error loading preferences from '{self.preferences_file}': {e}{Style.RESET_ALL}", file=sys.stderr)
            return DisplayPreferences()

    def save(self) -> bool:
        if not self.preferences_file:
            print(f"{Fore.RED}Error: Preferences file path not determined. Cannot save.{Style.RESET_ALL}", file=sys.stderr)
            return False
        try:
            pref_dir = os.path.dirname(self.preferences_file)
            if pref_dir:
                os.makedirs(pref_dir, exist_ok=True)
            with open(self.preferences_file, 'w', encoding='utf-8') as f:
                json.dump(self.preferences.model_dump(mode="json"), f, ensure_ascii=False, indent=2)
            return True
        except OSError as e:
            print(f"{Fore.RED}Error saving preferences to '{self.preferences_file}': {e}{Style.RESET_ALL}", file=sys.stderr)
            return False

    def toggle(self, name: str) -> Optional[bool]:
        """Flip a boolean setting by its short name; returns the new value or None if unknown."""
        field = BOOLEAN_SETTINGS.get(name)
        if field is None:
            return None
        value = not getattr(self.preferences, field)
        self.preferences = self.preferences.model_copy(update={field: value})
        return value

    def set_language(self, which: str, value: str) -> bool:
        """Set the primary or secondary language; False for unknown slots or languages."""
        value = value.strip().lower()
        try:
            if which == "primary":
                update = {"primary_language": Language(value)}
            elif which == "secondary":
                update = {"secondary_language": SecondaryLanguage(value)}
            else:
                return False
        except ValueError:
            return False
        self.preferences = self.preferences.model_copy(update=update)
        return True

    def set_theme(self, color: str) -> bool:
        """Set the accent color; False unless it is one of THEME_COLORS."""
        color = color.strip().lower()
        if color not in THEME_COLORS:
            return False
        self.preferences = self.preferences.model_copy(update={"theme_color": color})
        return True

    def show_settings_menu(self):
        """Interactive settings menu; changes are saved as they are made."""
        while True:
            prefs = self.preferences
            print(Fore.RED + "\n╭─ " + Style.BRIGHT + Fore.GREEN + "⚙️ Display Settings")
            for name, field in BOOLEAN_SETTINGS.items():
                state = f"{Fore.GREEN}ON" if getattr(prefs, field) else f"{Fore.RED}OFF"
                print(Fore.RED + f"├─ {Fore.CYAN}{name.ljust(16)}{Fore.WHITE}: {state}{Style.RESET_ALL}")
            print(Fore.RED + f"├─ {Fore.CYAN}{'primary <lang>'.ljust(16)}{Fore.WHITE}: {prefs.primary_language.value}")
            print(Fore.RED + f"├─ {Fore.CYAN}{'secondary <lang>'.ljust(16)}{Fore.WHITE}: {prefs.secondary_language.value}")
            print(Fore.RED + f"├─ {Fore.CYAN}{'theme <color>'.ljust(16)}{Fore.WHITE}: {prefs.theme_color}")
            print(Fore.RED + f"├─ {Fore.CYAN}{'back'.ljust(16)}{Fore.WHITE}: Return")
            print(Fore.RED + "╰────────────────────────────────────────")

            try:
                user_input = input(Fore.RED + "  ❯ " + Fore.WHITE).strip().lower()
            except (KeyboardInterrupt, EOFError):
                return

            if user_input in ['back', 'b', 'q']:
                return
            parts = user_input.split(maxsplit=1)
            if not parts:
                continue
            if parts[0] in ('primary', 'secondary') and len(parts) == 2:
                if not self.set_language(parts[0], parts[1]):
                    print(f"{Fore.YELLOW}Unknown language '{parts[1]}'.{Style.RESET_ALL}")
                    continue
            elif parts[0] == 'theme' and len(parts) == 2:
                if not self.set_theme(parts[1]):
                    print(f"{Fore.YELLOW}Unknown color '{parts[1]}'. Choose from: {', '.join(THEME_COLORS)}.{Style.RESET_ALL}")
                    continue
            elif self.toggle(parts[0]) is None:
                print(f"{Fore.YELLOW}Invalid option. Please try again.{Style.RESET_ALL}")
                continue
            self.save()
