"""Helpers for reading Tiled map files: decompression and path handling."""

from __future__ import annotations

import sys
import zlib

WINDOWS_PATHS = sys.platform == "win32"


class DecompressionError(ValueError):
    """Raised when compressed tile data cannot be inflated."""


def decompress(source, expected_size=0):
    """Inflate a complete zlib stream.

    ``expected_size`` is a size hint for the output; the result may be larger.
    """
    if expected_size < 0:
        raise ValueError("expected_size must not be negative")
    if not source:
        raise DecompressionError("input is empty, decompression failed")
    inflater = zlib.decompressobj()
    try:
        data = inflater.decompress(bytes(source))
    except zlib.error as exc:
        raise DecompressionError(
            f"inflate failed ({exc}); if using gzip or zstd compression try zlib instead"
        ) from exc
    if not inflater.eof:
        raise DecompressionError("compressed stream is truncated")
    if inflater.unused_data:
        raise DecompressionError("zlib decompression failed: unconsumed input")
    return data


def _absolute_prefix(path, windows=None):
    """Return the root prefix of an absolute path, or None for a relative one."""
    if windows is None:
        windows = WINDOWS_PATHS
    if not path:
        return None
    if path[0] == "/":
        return "/"
    if windows:
        if path[0] == "\\":
            return "\\"
        if len(path) >= 3 and path[1] == ":" and path[2] in "\\/":
            return path[:3]
    return None


def is_absolute_file_path(path, windows=None):
    """True if ``path`` is absolute; drive and backslash roots count when ``windows``."""
    return _absolute_prefix(path, windows) is not None


def resolve_file_path(path, working_dir):
    """Join ``path`` onto ``working_dir`` and normalise the result with '/' separators."""
    path = path.replace("\\", "/")
    working_dir = working_dir.replace("\\", "/")
    if not path:
        return working_dir

    path_prefix = _absolute_prefix(path)
    dir_prefix = _absolute_prefix(working_dir)
    prefix = path_prefix if path_prefix is not None else (dir_prefix or "")

    parts = []
    if working_dir and path_prefix is None:
        parts.extend(working_dir.split("/"))
        if dir_prefix is not None:
            del parts[0]
    path_parts = path.split("/")
    if path_prefix is not None:
        del path_parts[0]
    parts.extend(path_parts)

    parts = [part for part in parts if part and part != "."]

    i = 1
    while i < len(parts):
        if parts[i] == ".." and parts[i - 1] != "..":
            del parts[i - 1 : i + 1]
            if i > 1:
                i -= 1
        else:
            i += 1

    return prefix + "/".join(parts)


def read_file_into_string(path):
    """Return the whole text content of the file at ``path``."""
    with open(path, encoding="utf-8") as stream:
        return stream.read()