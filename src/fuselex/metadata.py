"""Descriptive lexer metadata and shebang auto-detection."""

from __future__ import annotations

import re
from fnmatch import fnmatch
from pathlib import PurePath

NAME = "Fuse"
DESCRIPTION = "Fuse (https://fuse-lang.github.io)"
TAG = "fuse"
FILENAMES = ("*.fuse", "*.fu")
MIMETYPES = ("text/x-fuse", "application/x-fuse")

_SHEBANG = re.compile(r"\A\s*#!(.*)$", re.MULTILINE)


def detect(text: str) -> bool:
    """Return True if text starts with a shebang line that runs fuse."""
    m = _SHEBANG.match(text)
    if m is None:
        return False
    return re.search(r"\bfuse(?:\s|$)", m.group(1)) is not None


def matches_filename(path: str | PurePath) -> bool:
    """Return True if the file name matches one of FILENAMES."""
    name = PurePath(path).name
    return any(fnmatch(name, pattern) for pattern in FILENAMES)
