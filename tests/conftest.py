import logging
import textwrap

import pytest


@pytest.fixture(autouse=True)
def reset_pipedef_logger():
    """CLI runs configure the pipedef logger; give every test a clean one."""
    yield
    logger = logging.getLogger("pipedef")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from an empty directory outside any git checkout."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_module(tmp_path):
    """Write a Python source file under tmp_path and return its path."""

    def _write(name: str, source: str) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return str(path)

    return _write
