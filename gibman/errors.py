"""
Error Kinds
-----------
Every failure GibMan reports carries a ``kind`` so the command line can
render it and map it to an exit code.
"""

from typing import Optional


class GibmanError(Exception):
    """Base class for all GibMan failures."""

    kind = "GibmanError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(GibmanError, ValueError):
    """Configuration file is missing, unreadable or malformed."""

    kind = "ConfigError"


class ResolutionError(GibmanError):
    """A requested IWAD, WAD, engine or preset could not be resolved."""

    kind = "ResolutionError"


class MissingFileError(ResolutionError):
    kind = "FileNotFound"

    def __init__(self, path: str, what: str = "file"):
        super().__init__(f"{what} '{path}' does not seem to exist; double check the path")
        self.path = path


class ConfiguredPathMissingError(ResolutionError):
    """A lookup table entry names an absolute path that is not on disk."""

    kind = "ConfiguredPathMissing"

    def __init__(self, table: str, name: str, path: str):
        super().__init__(
            f"entry '{name}' in [{table}] points to '{path}', which does not exist; "
            f"fix the path in your config"
        )
        self.table = table
        self.name = name
        self.path = path


class EngineConfigNotAbsoluteError(ResolutionError):
    kind = "EngineConfigNotAbsolute"

    def __init__(self, name: str, value: str):
        super().__init__(
            f"engine '{name}' is set to '{value}' in [engine]; engine entries must be "
            f"absolute paths, or empty if the engine is on your PATH"
        )
        self.name = name
        self.value = value


class PathsNotConfiguredError(ResolutionError):
    kind = "PathsNotConfigured"

    def __init__(self, name: str, field: str):
        super().__init__(
            f"'{name}' is not an absolute path or a configured entry, and {field} is empty; "
            f"add a search directory to {field}"
        )
        self.name = name
        self.field = field


class NoMatchFoundError(ResolutionError):
    kind = "NoMatchFound"

    def __init__(self, name: str, field: str, recursive: bool):
        hint = "" if recursive else " (recursive_search is off)"
        super().__init__(f"no file matching '{name}' found in {field}{hint}")
        self.name = name
        self.field = field


class NoIwadOrEngineSpecifiedError(ResolutionError):
    kind = "NoIwadOrEngineSpecified"

    def __init__(self, what: str, preset: Optional[str] = None):
        where = f"preset '{preset}'" if preset else "the command line"
        super().__init__(
            f"no {what} given by {where} and no default_{what} set in your config"
        )
        self.what = what
        self.preset = preset


class PresetNotFoundError(ResolutionError):
    kind = "PresetNotFound"

    def __init__(self, name: str):
        super().__init__(f"preset '{name}' not found in config; double check preset name")
        self.name = name


class LaunchError(GibmanError):
    """The engine process could not be started."""

    kind = "LaunchError"


class EngineNotFoundError(LaunchError):
    kind = "EngineNotFound"

    def __init__(self, name: str):
        super().__init__(
            f"engine '{name}' is not on your PATH and has no absolute path in [engine]"
        )
        self.name = name
