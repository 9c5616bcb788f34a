# quranlabs/utils.py
import os
import sys

import platformdirs

# This file provides path handling for the bundled corpus and the
# per-user settings file.

APP_NAME = "QuranLabs"
APP_AUTHOR = "QuranLabs"
DATA_DIR_ENV = "QURANLABS_DATA_DIR"


def get_app_path(resource_path: str = '') -> str:
    """
    Get the absolute path to a read-only resource shipped with the package.

    Handles both normal installs and PyInstaller frozen bundles.

    Args:
        resource_path: Path relative to the package directory.
                       Leave empty for the package directory itself.

    Returns:
        Absolute path as a string.
    """
    if getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'):
        # Bundled resources are unpacked under _MEIPASS/quranlabs
        base_path = os.path.join(sys._MEIPASS, 'quranlabs')
    else:
        base_path = os.path.dirname(os.path.abspath(__file__))

    return os.path.join(base_path, resource_path) if resource_path else base_path


def get_data_dir() -> str:
    """Directory holding the corpus JSON files; QURANLABS_DATA_DIR wins over the bundled copy."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return os.path.abspath(os.path.expanduser(override))
    return get_app_path('database')


def get_config_path(filename: str) -> str:
    """Path of a writable config file in the user's config directory (created if missing)."""
    config_dir = platformdirs.user_config_dir(APP_NAME, APP_AUTHOR)
    os.makedirs(config_dir, exist_ok=True)
    return os.path.join(config_dir, filename)
