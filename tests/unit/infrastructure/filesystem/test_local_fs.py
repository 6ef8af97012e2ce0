import asyncio
from pathlib import Path

import pytest

from stylepruner.domain.models.common import FileContent, FilePath, GlobPattern
from stylepruner.infrastructure.filesystem.local_fs import LocalFileSystem


def run(coro):
    return asyncio.run(coro)


def test_find_files_is_recursive_and_skips_directories(site: Path):
    (site / "folder.html").mkdir()

    found = run(LocalFileSystem().find_files(FilePath(str(site)), GlobPattern("**/*.html")))

    assert sorted(found) == sorted([
        str(site / "index.html"),
        str(site / "blog" / "post.html"),
        str(site / "plain.html"),
    ])


def test_find_files_handles_glob_characters_in_root(tmp_path: Path):
    root = tmp_path / "out[1]"
    root.mkdir()
    (root / "index.html").write_text("<html/>", encoding="utf-8")

    found = run(LocalFileSystem().find_files(FilePath(str(root)), GlobPattern("**/*.html")))

    assert found == [str(root / "index.html")]


def test_write_truncates_previous_content(tmp_path: Path):
    path = tmp_path / "page.html"
    path.write_text("a much longer original content", encoding="utf-8")
    fs = LocalFileSystem()

    run(fs.write_file(FilePath(str(path)), FileContent("short")))

    assert run(fs.read_file(FilePath(str(path)))) == "short"


def test_read_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        run(LocalFileSystem().read_file(FilePath(str(tmp_path / "missing.html"))))
