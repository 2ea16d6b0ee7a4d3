"""
Path Classifier
---------------
Filesystem predicates used to short-circuit search whenever a string
already denotes a path.
"""

import os


def is_absolute(path: str) -> bool:
    """True if ``path`` is a non-empty absolute filesystem path."""
    return bool(path) and os.path.isabs(path)


def exists(path: str) -> bool:
    return bool(path) and os.path.exists(path)


def exists_file(path: str) -> bool:
    return bool(path) and os.path.isfile(path)
