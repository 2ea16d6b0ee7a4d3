"""
GibMan - Main Module
--------------------
Command line entry point: loads the configuration, resolves the requested
preset and launches the engine.
"""

import argparse
import os
import shlex
import shutil
import subprocess
import sys
from typing import Callable, List, Optional

from rich.console import Console
from rich.table import Table

from . import __version__
from .config_loader import load_config
from .default_config import confirm, create_default_config, default_config_path
from .errors import ConfigError, LaunchError, ResolutionError
from .launcher import launch, plan_resolution
from .models import Configuration
from .reporting import ConsoleReporter, Reporter
from .resolver import resolve

VERSION_BANNER = f"""\
gibman {__version__}
Program written by Maxwell Jensen (c) 2022
Licensed under European Union Public Licence 1.2."""

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_RESOLUTION = 2
EXIT_LAUNCH = 3
EXIT_INTERRUPTED = 130


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gibman",
        description="A WAD manager for DOOM",
        epilog="Engine arguments go after all options. Use '--' before engine "
               "arguments that start with '-'.",
    )
    parser.add_argument("arguments", nargs="*", help="Pass additional arguments to engine")
    parser.add_argument("-p", "--preset", help="Specify preset to run DOOM with")
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Configuration file (default: $GIBMAN_CONFIG or the user config directory)",
    )
    parser.add_argument(
        "-l", "--list-presets",
        action="store_true",
        help="List presets in the configuration and exit",
    )
    parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="Print the engine command instead of running it",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show search details")
    parser.add_argument("--version", action="store_true", help="Print version information")
    return parser.parse_args(argv)


def init_config(config_path: str, reporter: Reporter,
                input_fn: Callable[[str], str] = input) -> Optional[Configuration]:
    """Load the configuration, offering to create it if it does not exist.

    Returns None when the file was missing, whether or not it was created.
    """
    if os.path.exists(config_path):
        return load_config(config_path, reporter)

    reporter.info("Config", f"Configuration file at {config_path} does not exist.")
    if confirm("Would you like to create one right now?", input_fn=input_fn):
        create_default_config(config_path)
        reporter.info("Config", f"{config_path} successfully created. You can now edit the file.")
    return None


def list_presets(config: Configuration, console: Console) -> None:
    if not config.presets:
        console.print("No presets configured.")
        return
    table = Table(title="Presets")
    table.add_column("Name", style="bold")
    table.add_column("Engine")
    table.add_column("IWAD")
    table.add_column("WADs", justify="right")
    table.add_column("Note")
    for name, preset in sorted(config.presets.items()):
        table.add_row(
            name,
            str(preset.engine) or f"{config.default_engine} (default)",
            str(preset.iwad) or f"{config.default_iwad} (default)",
            str(len(preset.wads)),
            preset.note,
        )
    console.print(table)


def run(argv: Optional[List[str]] = None,
        input_fn: Callable[[str], str] = input,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        which: Callable[[str], Optional[str]] = shutil.which,
        console: Optional[Console] = None,
        reporter: Optional[Reporter] = None) -> int:
    """Run the command line and return the exit code."""
    args = parse_args(argv)
    console = console or Console(highlight=False)
    reporter = reporter or ConsoleReporter(verbose=args.verbose)

    if args.version:
        console.print(VERSION_BANNER, markup=False)
        return EXIT_OK

    config_path = args.config or default_config_path()
    try:
        config = init_config(config_path, reporter, input_fn)
        if config is None:
            return EXIT_CONFIG

        if args.list_presets:
            list_presets(config, console)
            return EXIT_OK

        resolution = resolve(config, args.preset, reporter)
        if resolution.preset is not None and resolution.preset.note:
            reporter.info("Preset", resolution.preset.note)
        plan = plan_resolution(resolution, args.arguments, which)

        if args.dry_run:
            if plan.cwd:
                console.print(f"cd {plan.cwd}", markup=False, soft_wrap=True)
            console.print(shlex.join(plan.command), markup=False, soft_wrap=True)
            return EXIT_OK

        return launch(plan, reporter, runner)
    except ConfigError as e:
        reporter.error("Error", f"{e.kind}: {e}")
        return EXIT_CONFIG
    except ResolutionError as e:
        reporter.error("Error", f"{e.kind}: {e}")
        return EXIT_RESOLUTION
    except LaunchError as e:
        reporter.error("Error", f"{e.kind}: {e}")
        return EXIT_LAUNCH
    except KeyboardInterrupt:
        reporter.info("App", "Interrupted")
        return EXIT_INTERRUPTED


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
