"""Shared pytest fixtures."""

import logging
import shutil
from pathlib import Path

import pytest

from anagrams.logging.context import clear_log_context

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ENV_VARS = (
    "ANAGRAMS_INPUT_DIR",
    "ANAGRAMS_OUTPUT_FILE",
    "ANAGRAMS_WORKERS",
    "LOG_LEVEL",
    "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Make sure no developer environment leaks into the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """configure_logging() replaces root handlers; put the originals back."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    clear_log_context()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_log_context()


@pytest.fixture
def corpus_dir(tmp_path) -> Path:
    """Writable copy of tests/fixtures/corpus."""
    target = tmp_path / "corpus"
    shutil.copytree(FIXTURES_DIR / "corpus", target)
    return target


@pytest.fixture
def expected_corpus_output() -> str:
    """Count file expected for the fixture corpus."""
    return "oruy - 1\nabder - 4\nopst - 6\neilnst - 4\n"
