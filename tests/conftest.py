import logging
import os
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stylepruner.infrastructure.config import settings

FIXTURES = Path(__file__).parent / "fixtures"
FAKE_UNCSS = FIXTURES / "fake_uncss.py"


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def fake_uncss_command():
    """Command list that runs the fake uncss script with this interpreter."""
    return [sys.executable, str(FAKE_UNCSS)]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch):
    """Keeps each test away from the developer's stylepruner.yaml, .env and env vars."""
    for name in list(os.environ):
        if name.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(name)
    settings.clear_test_config()
    settings.load_configuration(config_file=tmp_path / "missing.yaml", env_file=tmp_path / "missing.env", reload=True)
    yield
    settings.clear_test_config()


@pytest.fixture
def site(tmp_path: Path):
    """Creates a small generated site with pages with and without style blocks."""
    root = tmp_path / "_site"
    (root / "blog").mkdir(parents=True)
    (root / "index.html").write_text(
        '<html><style>.a{color:red}.b{color:blue}</style><p class="a">hi</p></html>',
        encoding="utf-8",
    )
    (root / "blog" / "post.html").write_text(
        '<html><style>.b{color:blue}.c{margin:0}</style><p class="c">post</p></html>',
        encoding="utf-8",
    )
    (root / "plain.html").write_text("<html><p>no styles here</p></html>", encoding="utf-8")
    (root / "style.css").write_text(".a{color:red}", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
