"""
Config Loader Module
--------------------
Handles loading and validation of the TOML configuration file, and turns it
into an immutable Configuration.
"""

import os
import re
import tomllib
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigError
from .models import Configuration, Name, Preset, Target, Unset, classify
from .reporting import NULL_REPORTER, Reporter

PRESET_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")
PRESET_KEYS = ("iwad", "engine", "note", "wads")
SEPARATORS = ("/", os.sep, os.altsep)


def validate_section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return section ``name`` of ``data``, or an empty dict if it is missing."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def validate_path_list(section: str, key: str, value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise ConfigError(f"'{key}' in [{section}] must be a list of strings")
    return tuple(os.path.expanduser(p) for p in value)


def validate_flag(section: str, key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' in [{section}] must be true or false")
    return value


def validate_string(section: str, key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' in [{section}] must be a string")
    return value


def validate_file_target(section: str, key: str, value: Any) -> Target:
    """Classify a WAD or IWAD reference, rejecting relative paths.

    Search matches file names only, so a relative value with a directory in
    it could never be found.
    """
    target = classify(validate_string(section, key, value))
    if isinstance(target, Name) and any(sep and sep in target.value for sep in SEPARATORS):
        raise ConfigError(
            f"'{key}' in [{section}] must be a file name or an absolute path, "
            f"not '{target.value}'"
        )
    return target


def validate_table(section: str, table: Any, skip: Tuple[str, ...] = (),
                   file_names: bool = True) -> Dict[str, Target]:
    """Validate a name -> path table and classify its values."""
    if not isinstance(table, dict):
        raise ConfigError(f"[{section}] must be a table")
    result = {}
    for key, value in table.items():
        if key in skip:
            continue
        if file_names:
            result[key] = validate_file_target(section, key, value)
        else:
            result[key] = classify(validate_string(section, key, value))
    return result


def validate_preset(name: str, preset: Any) -> Preset:
    section = f"preset.{name}"
    if not PRESET_NAME_RE.match(name):
        raise ConfigError(
            f"preset name '{name}' may only contain letters, digits, underscores and hyphens"
        )
    if not isinstance(preset, dict):
        raise ConfigError(f"[{section}] must be a table")

    unknown = sorted(set(preset) - set(PRESET_KEYS))
    if unknown:
        raise ConfigError(f"[{section}] has unknown key(s): {', '.join(unknown)}")

    wads = preset.get("wads", [])
    if not isinstance(wads, list):
        raise ConfigError(f"'wads' in [{section}] must be a list of strings")
    wad_targets = []
    for wad in wads:
        target = validate_file_target(section, "wads", wad)
        if isinstance(target, Unset):
            raise ConfigError(f"'wads' in [{section}] contains an empty entry")
        wad_targets.append(target)

    return Preset(
        name=name,
        iwad=validate_file_target(section, "iwad", preset.get("iwad", "")),
        engine=classify(validate_string(section, "engine", preset.get("engine", ""))),
        note=validate_string(section, "note", preset.get("note", "")),
        wads=tuple(wad_targets),
    )


def parse_config(data: Dict[str, Any], source: Optional[str] = None) -> Configuration:
    """Validate parsed TOML data and build a Configuration.

    Args:
        data: Dictionary as returned by ``tomllib``
        source: Path the data was read from, kept for messages

    Returns:
        The immutable Configuration

    Raises:
        ConfigError: If any section or value has the wrong shape
    """
    iwad = validate_section(data, "iwad")
    engine = validate_section(data, "engine")
    wad = validate_section(data, "wad")
    presets = validate_section(data, "preset")

    paths = validate_path_list("iwad", "iwad_paths", iwad.get("iwad_paths", []))
    recursive = validate_flag("iwad", "recursive_search", iwad.get("recursive_search", False))

    wad_paths = None
    if "wad_paths" in wad:
        wad_paths = validate_path_list("wad", "wad_paths", wad["wad_paths"])
    wad_recursive = None
    if "recursive_search" in wad:
        wad_recursive = validate_flag("wad", "recursive_search", wad["recursive_search"])

    return Configuration(
        paths=paths,
        recursive_search=recursive,
        default_iwad=validate_file_target("iwad", "default_iwad", iwad.get("default_iwad", "")),
        default_engine=classify(
            validate_string("engine", "default_engine", engine.get("default_engine", ""))
        ),
        iwad_table=validate_table("iwad.list", iwad.get("list", {})),
        wad_table=validate_table("wad.list", wad.get("list", {})),
        engine_table=validate_table("engine", engine, skip=("default_engine",), file_names=False),
        presets={name: validate_preset(name, preset) for name, preset in presets.items()},
        wad_paths=wad_paths,
        wad_recursive_search=wad_recursive,
        source=source,
    )


def load_config(config_path: str, reporter: Optional[Reporter] = None) -> Configuration:
    """Load and validate configuration from a TOML file.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or fails
            validation
    """
    reporter = reporter or NULL_REPORTER
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {config_path}") from None
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e.strerror}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Error decoding TOML from {config_path}: {e}") from e

    config = parse_config(data, source=config_path)
    reporter.debug(
        "Config",
        f"loaded {config_path}: {len(config.iwad_table)} iwads, {len(config.wad_table)} wads, "
        f"{len(config.engine_table)} engines, {len(config.presets)} presets",
    )
    return config
