"""
Default Configuration
---------------------
Text written to config.toml on first run, and the prompt that asks for it.
"""

import os
from typing import Callable

from platformdirs import user_config_path

from .errors import ConfigError

APP_NAME = "gibman"
CONFIG_ENV_VAR = "GIBMAN_CONFIG"

DEFAULT_CONFIG = """\
# GibMan configuration. Run 'gibman --help' for command line usage.

[iwad]
# Directories searched for IWADs that are not given as absolute paths.
iwad_paths = [
  "/path/to/iwads",
]
# Search iwad_paths recursively. Slow on directories with many files.
recursive_search = false
# IWAD used when no preset is given, or the preset has no iwad.
# Refers to an entry in [iwad.list], or is an absolute path.
default_iwad = "doom"

[iwad.list]
# Absolute paths must be exact. Leave an entry empty (or give a bare name)
# to search iwad_paths for it; matching ignores case and the .wad extension,
# so "doom2" finds DOOM2.WAD.
doom = ""
doom2 = "/path/to/DOOM2.WAD"
tnt = ""
plutonia = ""
heretic = ""
hexen = ""
strife = ""

[engine]
# Engine used when no preset is given, or the preset has no engine.
default_engine = "gzdoom"
# Leave empty if the engine is on your PATH, otherwise give its absolute path.
gzdoom = ""
zdoom = ""
boom = "/path/to/boom"

[wad]
# Directories searched for WADs (wad, pk3, zip, pak). Falls back to
# iwad_paths when left out.
wad_paths = [
  "/path/to/wads",
]
recursive_search = false

[wad.list]
# Absolute path:
wad1 = "/path/to/foobar.wad"
# Or a name searched for in wad_paths:
wad2 = "wad2"

# Presets are launched with 'gibman -p <name>'. Names may contain letters,
# digits, underscores and hyphens. iwad and engine fall back to the defaults.
[preset.example]
iwad = "doom2"
engine = "gzdoom"
note = "Notes show up in 'gibman --list-presets'"
# Entries in [wad.list] or absolute paths, loaded top to bottom.
wads = [
  "wad1",
  "wad2",
  "/path/to/example.wad",
]
"""


def default_config_path() -> str:
    """Config file location: $GIBMAN_CONFIG, else the per-user config dir."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return os.path.expanduser(override)
    return str(user_config_path(APP_NAME) / "config.toml")


def confirm(prompt: str, default: bool = False, input_fn: Callable[[str], str] = input) -> bool:
    """Simple yes/no prompt. Empty input returns ``default``."""
    yn = "(Y/n)" if default else "(y/N)"
    try:
        answer = input_fn(f"{prompt} {yn} ").strip()
    except EOFError:
        return default
    if not answer:
        return default
    return answer[0] in ("y", "Y")


def create_default_config(config_path: str) -> str:
    """Write the default configuration to ``config_path``, creating parent dirs.

    Raises:
        ConfigError: If the directory or the file cannot be written
    """
    directory = os.path.dirname(os.path.abspath(config_path))
    try:
        os.makedirs(directory, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG)
    except OSError as e:
        raise ConfigError(f"Cannot create {config_path}: {e.strerror}") from e
    return config_path
