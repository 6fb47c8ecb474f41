"""Tests for local file helpers."""

from __future__ import annotations

import os
import stat
import sys
from typing import TYPE_CHECKING

import pytest

from pages_env.errors import FileIOError
from pages_env.files import read_text, write_atomic

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")


def test_read_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileIOError) as exc_info:
        read_text(tmp_path / "missing.json")
    assert exc_info.value.path == tmp_path / "missing.json"


def test_read_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_bytes(b"\xff\xfe\x00")
    with pytest.raises(FileIOError, match="UTF-8"):
        read_text(path)


def test_write_atomic_replaces(tmp_path: Path) -> None:
    path = tmp_path / "out.json"
    path.write_text("old")
    write_atomic(path, "new\n")
    assert path.read_text() == "new\n"
    assert [p.name for p in tmp_path.iterdir()] == ["out.json"]


def test_write_atomic_missing_directory(tmp_path: Path) -> None:
    path = tmp_path / "nope" / "out.json"
    with pytest.raises(FileIOError):
        write_atomic(path, "x")
    assert not path.exists()


@pytest.fixture
def umask_022() -> Iterator[None]:
    old = os.umask(0o022)
    yield
    os.umask(old)


@posix_only
@pytest.mark.parametrize("mode", [0o644, 0o640, 0o600])
def test_write_atomic_keeps_existing_mode(tmp_path: Path, mode: int) -> None:
    path = tmp_path / ".env"
    path.write_text("old")
    path.chmod(mode)
    write_atomic(path, "new\n")
    assert stat.S_IMODE(path.stat().st_mode) == mode


@posix_only
@pytest.mark.usefixtures("umask_022")
def test_write_atomic_new_file_follows_umask(tmp_path: Path) -> None:
    path = tmp_path / "out.json"
    write_atomic(path, "{}\n")
    assert stat.S_IMODE(path.stat().st_mode) == 0o644
