"""
Directory Searcher
------------------
Finds a file by basename under a list of search roots.

Matching is case-insensitive on the filename only. When a set of extensions
is required, "doom2" and "DOOM2.WAD" both match a file named "doom2.wad".
Roots are visited in order and the first match wins. A recursive search over
a very large tree blocks until the walk finishes; there is no timeout.
"""

import os
from typing import AbstractSet, Iterator, Optional, Sequence

from . import paths
from .reporting import NULL_REPORTER, Reporter


def normalize_extensions(extensions: Optional[AbstractSet[str]]) -> Optional[frozenset]:
    if extensions is None:
        return None
    return frozenset(ext.lower().lstrip(".") for ext in extensions)


def matches(filename: str, basename: str, extensions: Optional[AbstractSet[str]] = None) -> bool:
    """Check a single filename against the requested basename.

    Args:
        filename: Name of a file on disk, without directory components
        basename: Requested name, with or without extension
        extensions: Allowed extensions (lower case, no dot), or None for
            plain filename equality
    """
    candidate = filename.lower()
    wanted = basename.lower()
    if extensions is None:
        return candidate == wanted

    stem, ext = os.path.splitext(candidate)
    if ext.lstrip(".") not in extensions:
        return False
    return stem == wanted or candidate == wanted


def _walk_errors(reporter: Reporter):
    def onerror(err: OSError) -> None:
        reporter.warning("Search", f"skipping unreadable directory '{err.filename}': {err.strerror}")
    return onerror


def _scan_root(root: str, basename: str, extensions: Optional[frozenset],
               recursive: bool, reporter: Reporter) -> Iterator[str]:
    if recursive:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_walk_errors(reporter)):
            dirnames.sort()
            for filename in sorted(filenames):
                candidate = os.path.join(dirpath, filename)
                # os.walk lists dangling symlinks as files
                if paths.exists_file(candidate) and matches(filename, basename, extensions):
                    yield candidate
        return

    try:
        entries = sorted(os.listdir(root))
    except OSError as e:
        reporter.warning("Search", f"cannot read search path '{root}': {e.strerror}")
        return
    for filename in entries:
        candidate = os.path.join(root, filename)
        if paths.exists_file(candidate) and matches(filename, basename, extensions):
            yield candidate


def iter_matches(roots: Sequence[str], basename: str,
                 required_extensions: Optional[AbstractSet[str]] = None,
                 recursive: bool = False,
                 reporter: Optional[Reporter] = None) -> Iterator[str]:
    """Yield every file under ``roots`` matching ``basename``, in scan order."""
    reporter = reporter or NULL_REPORTER
    extensions = normalize_extensions(required_extensions)
    for root in roots:
        if not os.path.isdir(root):
            reporter.warning("Search", f"search path '{root}' is not a directory, skipping")
            continue
        reporter.debug("Search", f"looking for '{basename}' in {root}"
                                 f"{' (recursive)' if recursive else ''}")
        yield from _scan_root(root, basename, extensions, recursive, reporter)


def search(roots: Sequence[str], basename: str,
           required_extensions: Optional[AbstractSet[str]] = None,
           recursive: bool = False,
           reporter: Optional[Reporter] = None) -> Optional[str]:
    """Return the first file under ``roots`` matching ``basename``, or None."""
    return next(iter_matches(roots, basename, required_extensions, recursive, reporter), None)
