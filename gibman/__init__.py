"""
GibMan Package
--------------
Resolves IWADs, WADs and engines from a TOML configuration and launches
DOOM source ports with them.
"""

__version__ = "0.1.0"

from .config_loader import load_config
from .errors import ConfigError, GibmanError, LaunchError, ResolutionError
from .launcher import build_arguments, launch, plan_launch
from .models import Configuration, Preset
from .resolver import resolve, resolve_engine, resolve_iwad, resolve_wads

__all__ = [
    'Configuration',
    'Preset',
    'load_config',
    'resolve',
    'resolve_iwad',
    'resolve_engine',
    'resolve_wads',
    'build_arguments',
    'plan_launch',
    'launch',
    'GibmanError',
    'ConfigError',
    'ResolutionError',
    'LaunchError',
]
