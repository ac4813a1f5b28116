import gzip
import posixpath
import zlib

import pytest

from classdash.tmxfuncs import (
    DecompressionError,
    decompress,
    is_absolute_file_path,
    read_file_into_string,
    resolve_file_path,
)

PAYLOAD = bytes(range(256)) * 20


def test_decompress_round_trip():
    assert decompress(zlib.compress(PAYLOAD), 16) == PAYLOAD


def test_decompress_grows_past_expected_size():
    data = decompress(zlib.compress(PAYLOAD), 1)
    assert len(data) == len(PAYLOAD)


def test_decompress_empty_raises():
    with pytest.raises(DecompressionError):
        decompress(b"", 10)


def test_decompress_truncated_raises():
    compressed = zlib.compress(PAYLOAD)
    with pytest.raises(DecompressionError):
        decompress(compressed[: len(compressed) // 2], len(PAYLOAD))


def test_decompress_trailing_input_raises():
    with pytest.raises(DecompressionError):
        decompress(zlib.compress(PAYLOAD) + b"extra", len(PAYLOAD))


def test_decompress_garbage_raises():
    with pytest.raises(DecompressionError):
        decompress(b"not compressed at all", 10)


def test_decompress_gzip_rejected():
    with pytest.raises(DecompressionError):
        decompress(gzip.compress(PAYLOAD), len(PAYLOAD))


def test_decompress_negative_size_rejected():
    with pytest.raises(ValueError):
        decompress(zlib.compress(PAYLOAD), -1)


@pytest.mark.parametrize("windows", [True, False])
def test_slash_root_is_absolute(windows):
    assert is_absolute_file_path("/assets/map.tmx", windows) is True


@pytest.mark.parametrize("path", ["", "assets/map.tmx", "C:x", "./a"])
def test_relative_paths(path):
    assert is_absolute_file_path(path, True) is False


def test_windows_roots_only_when_enabled():
    assert is_absolute_file_path("\\assets", True) is True
    assert is_absolute_file_path("C:\\assets", True) is True
    assert is_absolute_file_path("D:/assets", True) is True
    assert is_absolute_file_path("\\assets", False) is False
    assert is_absolute_file_path("C:\\assets", False) is False


def test_resolve_empty_path_returns_working_dir():
    assert resolve_file_path("", "maps/levels") == "maps/levels"


def test_resolve_absolute_path_ignores_working_dir():
    assert resolve_file_path("/img/tiles.png", "maps") == "/img/tiles.png"


@pytest.mark.parametrize(
    "path, working_dir",
    [
        ("tiles.png", "maps"),
        ("./a/./b.png", "root/dir"),
        ("x//y.png", "/abs/dir"),
        ("../tiles/a.png", "maps/level"),
        ("../../x.png", ""),
        ("a/../../b.png", "c"),
    ],
)
def test_resolve_matches_normalised_join(path, working_dir):
    expected = posixpath.normpath(posixpath.join(working_dir, path))
    assert resolve_file_path(path, working_dir) == expected


def test_resolve_backslashes_are_separators():
    assert resolve_file_path("..\\a\\b.png", "maps\\lvl") == resolve_file_path(
        "../a/b.png", "maps/lvl"
    )


@pytest.mark.parametrize(
    "path, working_dir",
    [("../tiles/a.png", "maps/level"), ("./q/r/../s", "/root"), ("../../x", "")],
)
def test_resolve_is_idempotent(path, working_dir):
    once = resolve_file_path(path, working_dir)
    assert resolve_file_path(once, "") == once
    assert "/./" not in once and "//" not in once


def test_read_file_into_string(tmp_path):
    target = tmp_path / "map.tmx"
    target.write_text("<map/>\nline two\n", encoding="utf-8")
    assert read_file_into_string(target) == "<map/>\nline two\n"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file_into_string(tmp_path / "missing.tmx")