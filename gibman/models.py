"""
Data Model
----------
Immutable configuration snapshot and the values produced by resolution.

Strings from the config file are classified once into ``Unset``, ``Name``
or ``AbsolutePath`` so the resolvers never inspect raw strings.
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Unset:
    """No value was given (missing key or empty string)."""

    def __str__(self) -> str:
        return ""


@dataclass(frozen=True)
class Name:
    """A symbolic name or relative basename."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AbsolutePath:
    value: str

    def __str__(self) -> str:
        return self.value


Target = Union[Unset, Name, AbsolutePath]

UNSET = Unset()


def classify(raw: Optional[str]) -> Target:
    """Turn a raw config or command-line string into a Target."""
    if raw is None:
        return UNSET
    value = raw.strip()
    if not value:
        return UNSET
    value = os.path.expanduser(value)
    if os.path.isabs(value):
        return AbsolutePath(value)
    return Name(value)


def _frozen(mapping: Optional[Mapping] = None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Preset:
    name: str
    iwad: Target = UNSET
    engine: Target = UNSET
    note: str = ""
    wads: Tuple[Target, ...] = ()


@dataclass(frozen=True)
class Configuration:
    """Parsed configuration, loaded once per run and never mutated."""

    paths: Tuple[str, ...] = ()
    recursive_search: bool = False
    default_iwad: Target = UNSET
    default_engine: Target = UNSET
    iwad_table: Mapping[str, Target] = field(default_factory=_frozen)
    wad_table: Mapping[str, Target] = field(default_factory=_frozen)
    engine_table: Mapping[str, Target] = field(default_factory=_frozen)
    presets: Mapping[str, Preset] = field(default_factory=_frozen)
    wad_paths: Optional[Tuple[str, ...]] = None
    wad_recursive_search: Optional[bool] = None
    source: Optional[str] = None

    def __post_init__(self):
        # Callers may pass plain dicts and lists; store read-only copies.
        object.__setattr__(self, "paths", tuple(self.paths))
        if self.wad_paths is not None:
            object.__setattr__(self, "wad_paths", tuple(self.wad_paths))
        for name in ("iwad_table", "wad_table", "engine_table", "presets"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    @property
    def wad_search_paths(self) -> Tuple[str, ...]:
        return self.paths if self.wad_paths is None else self.wad_paths

    @property
    def wad_search_recursive(self) -> bool:
        if self.wad_recursive_search is None:
            return self.recursive_search
        return self.wad_recursive_search


@dataclass(frozen=True)
class ResolvedEngine:
    """Engine selection. ``path`` is None when the name is left to PATH lookup."""

    name: str
    path: Optional[str] = None


@dataclass(frozen=True)
class Resolution:
    engine: ResolvedEngine
    iwad: Optional[str]
    wads: Tuple[str, ...] = ()
    preset: Optional[Preset] = None


@dataclass(frozen=True)
class LaunchPlan:
    executable: str
    cwd: Optional[str]
    args: Tuple[str, ...] = ()

    @property
    def command(self) -> list:
        return [self.executable, *self.args]
