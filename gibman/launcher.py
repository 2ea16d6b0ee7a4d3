"""
Launcher Module
---------------
Builds the engine argument vector and runs the engine process.
"""

import os
import shutil
import subprocess
import sys
from typing import Callable, Optional, Sequence

from .errors import EngineNotFoundError, LaunchError
from .models import LaunchPlan, Resolution, ResolvedEngine
from .reporting import NULL_REPORTER, Reporter


def build_arguments(iwad: Optional[str], wads: Sequence[str], passthrough: Sequence[str] = ()) -> list:
    """Assemble ``-iwad``, ``-file`` and passthrough arguments in launch order."""
    args = []
    # An empty -iwad is never passed; engines other than GZDoom may choke on it
    if iwad:
        args += ["-iwad", iwad]
    for wad in wads:
        args += ["-file", wad]
    args.extend(passthrough)
    return args


def _same_file(a: str, b: str) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def plan_launch(engine: ResolvedEngine, args: Sequence[str],
                which: Callable[[str], Optional[str]] = shutil.which) -> LaunchPlan:
    """Decide how the engine is invoked.

    Engines reachable through PATH are run by bare name. An engine known only
    by its absolute path is run from its own directory, which some source
    ports need to find their bundled data.
    """
    if engine.path is None:
        if which(engine.name) is None:
            raise EngineNotFoundError(engine.name)
        return LaunchPlan(executable=engine.name, cwd=None, args=tuple(args))

    directory, filename = os.path.split(engine.path)
    on_path = which(filename)
    if on_path is not None and _same_file(on_path, engine.path):
        return LaunchPlan(executable=filename, cwd=None, args=tuple(args))

    if sys.platform == "win32":
        executable = engine.path
    else:
        executable = os.path.join(os.curdir, filename)
    return LaunchPlan(executable=executable, cwd=directory, args=tuple(args))


def plan_resolution(resolution: Resolution, passthrough: Sequence[str] = (),
                    which: Callable[[str], Optional[str]] = shutil.which) -> LaunchPlan:
    args = build_arguments(resolution.iwad, resolution.wads, passthrough)
    return plan_launch(resolution.engine, args, which)


def launch(plan: LaunchPlan, reporter: Optional[Reporter] = None,
           runner: Callable[..., subprocess.CompletedProcess] = subprocess.run) -> int:
    """Run the engine and wait for it. Returns the engine's exit code."""
    reporter = reporter or NULL_REPORTER
    where = f" in {plan.cwd}" if plan.cwd else ""
    reporter.debug("Launch", f"running {' '.join(plan.command)}{where}")
    try:
        result = runner(plan.command, cwd=plan.cwd, check=False)
    except OSError as e:
        raise LaunchError(f"could not start '{plan.executable}': {e}") from e
    if result.returncode != 0:
        reporter.debug("Launch", f"engine exited with code {result.returncode}")
    return result.returncode
