"""
Resolution Orchestrator
-----------------------
Turns the IWAD, engine and WAD names of a preset (or the config defaults)
into verified paths.

Precedence for IWADs and WADs:
1. An absolute path is used as-is if it exists.
2. A table entry with an absolute path is used if it exists. A broken entry
   is a hard error and never falls through to search.
3. Otherwise the search paths are scanned for a file with a known extension.
"""

from typing import AbstractSet, Mapping, Optional, Sequence, Tuple, Union

from . import lookup
from .errors import (
    EngineConfigNotAbsoluteError,
    NoIwadOrEngineSpecifiedError,
    NoMatchFoundError,
    PathsNotConfiguredError,
    PresetNotFoundError,
)
from .models import (
    UNSET,
    Configuration,
    Name,
    Preset,
    Resolution,
    ResolvedEngine,
    Target,
    Unset,
    classify,
)
from .reporting import NULL_REPORTER, Reporter
from .search import search

IWAD_EXTENSIONS = frozenset({"wad"})
WAD_EXTENSIONS = frozenset({"wad", "pk3", "zip", "pak"})


def _as_target(requested: Union[str, Target, None]) -> Target:
    if requested is None or isinstance(requested, str):
        return classify(requested)
    return requested


def _wad_paths_field(config: Configuration) -> str:
    if config.wad_paths is None:
        return "[iwad] iwad_paths"
    return "[wad] wad_paths"


def resolve_file(target: Target, table: Mapping[str, Target], table_name: str,
                 roots: Sequence[str], roots_field: str, recursive: bool,
                 extensions: AbstractSet[str], reporter: Reporter) -> str:
    """Resolve an IWAD or WAD target through the absolute/table/search chain."""
    name = str(target)
    found = lookup.resolve_named(table, name, table_name)
    if found is not None:
        reporter.debug("Resolve", f"'{name}' -> {found}")
        return found

    if not roots:
        raise PathsNotConfiguredError(name, roots_field)

    basename = lookup.search_name(table, name)
    match = search(roots, basename, extensions, recursive, reporter)
    if match is None:
        raise NoMatchFoundError(basename, roots_field, recursive)
    reporter.debug("Resolve", f"'{name}' found at {match}")
    return match


def resolve_iwad(config: Configuration, requested: Union[str, Target],
                 reporter: Optional[Reporter] = None) -> str:
    """Resolve an IWAD name or path to an existing file."""
    target = _as_target(requested)
    if isinstance(target, Unset):
        raise NoIwadOrEngineSpecifiedError("iwad")
    return resolve_file(
        target, config.iwad_table, "iwad.list",
        config.paths, "[iwad] iwad_paths", config.recursive_search,
        IWAD_EXTENSIONS, reporter or NULL_REPORTER,
    )


def resolve_engine(config: Configuration, requested: Union[str, Target],
                   reporter: Optional[Reporter] = None) -> ResolvedEngine:
    """Resolve an engine name or path.

    An engine that is neither absolute nor configured with a path comes back
    with ``path=None`` so the launcher can look the bare name up on PATH.
    """
    reporter = reporter or NULL_REPORTER
    target = _as_target(requested)
    if isinstance(target, Unset):
        raise NoIwadOrEngineSpecifiedError("engine")

    name = str(target)
    entry = config.engine_table.get(name)
    if isinstance(entry, Name):
        raise EngineConfigNotAbsoluteError(name, entry.value)

    path = lookup.resolve_named(config.engine_table, name, "engine")
    if path is None:
        reporter.debug("Resolve", f"engine '{name}' has no configured path, leaving it to PATH")
    else:
        reporter.debug("Resolve", f"engine '{name}' -> {path}")
    return ResolvedEngine(name=name, path=path)


def resolve_wads(config: Configuration, preset: Preset,
                 reporter: Optional[Reporter] = None) -> Tuple[str, ...]:
    """Resolve every WAD of ``preset`` in load order."""
    reporter = reporter or NULL_REPORTER
    roots = config.wad_search_paths
    field = _wad_paths_field(config)
    return tuple(
        resolve_file(
            wad, config.wad_table, "wad.list",
            roots, field, config.wad_search_recursive,
            WAD_EXTENSIONS, reporter,
        )
        for wad in preset.wads
    )


def get_preset(config: Configuration, name: str) -> Preset:
    try:
        return config.presets[name]
    except KeyError:
        raise PresetNotFoundError(name) from None


def resolve(config: Configuration, preset_name: Optional[str] = None,
            reporter: Optional[Reporter] = None) -> Resolution:
    """Resolve the engine, IWAD and WADs for a preset, or the defaults.

    Args:
        config: Loaded configuration
        preset_name: Preset to launch; None launches the default IWAD with
            the default engine and no WADs
        reporter: Diagnostics collaborator

    Raises:
        ResolutionError: any of its subclasses, for the first failure found
    """
    reporter = reporter or NULL_REPORTER
    preset = get_preset(config, preset_name) if preset_name is not None else None

    iwad: Target = preset.iwad if preset else UNSET
    engine: Target = preset.engine if preset else UNSET
    if isinstance(iwad, Unset):
        iwad = config.default_iwad
    if isinstance(engine, Unset):
        engine = config.default_engine

    # Check both before touching the filesystem
    if isinstance(iwad, Unset):
        raise NoIwadOrEngineSpecifiedError("iwad", preset_name)
    if isinstance(engine, Unset):
        raise NoIwadOrEngineSpecifiedError("engine", preset_name)

    resolved_engine = resolve_engine(config, engine, reporter)
    resolved_iwad = resolve_iwad(config, iwad, reporter)
    wads = resolve_wads(config, preset, reporter) if preset else ()
    return Resolution(engine=resolved_engine, iwad=resolved_iwad, wads=wads, preset=preset)
