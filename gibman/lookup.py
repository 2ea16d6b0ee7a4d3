"""
Name Resolver
-------------
Resolves a symbolic name against one of the config lookup tables.

A table entry that points to a missing absolute path is reported as
``ConfiguredPathMissingError`` rather than a plain miss, so the user learns
which entry is broken instead of getting a generic "not found".
"""

from typing import Mapping, Optional

from . import paths
from .errors import ConfiguredPathMissingError, MissingFileError
from .models import AbsolutePath, Name, Target


def resolve_named(table: Mapping[str, Target], name: str, table_name: str = "list") -> Optional[str]:
    """Resolve ``name`` to an existing absolute path, or None on a soft miss.

    Args:
        table: Lookup table (name -> Target) from the configuration
        name: Requested name, or an absolute path
        table_name: Table name used in error messages (e.g. "iwad.list")

    Returns:
        The existing absolute path, or None when the caller should fall
        through to directory search.

    Raises:
        MissingFileError: ``name`` is an absolute path that is not an existing file
        ConfiguredPathMissingError: the table entry is an absolute path that
            is not an existing file
    """
    if paths.is_absolute(name):
        if paths.exists_file(name):
            return name
        raise MissingFileError(name)

    entry = table.get(name)
    if isinstance(entry, AbsolutePath):
        if paths.exists_file(entry.value):
            return entry.value
        raise ConfiguredPathMissingError(table_name, name, entry.value)
    return None


def search_name(table: Mapping[str, Target], name: str) -> str:
    """Basename to search for once ``resolve_named`` missed."""
    entry = table.get(name)
    if isinstance(entry, Name):
        return entry.value
    return name
