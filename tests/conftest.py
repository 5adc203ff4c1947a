"""
Shared fixtures

source_tree writes a dict of relative path -> text under tmp_path and
returns the root, so each test describes its files inline.
"""

from pathlib import Path
from typing import Callable, Dict

import pytest

from buildjs.lib.log import state_connectToLogger


@pytest.fixture
def source_tree(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    def make(files: Dict[str, str]) -> Path:
        for name, text in files.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8", newline="")
        return tmp_path

    return make


@pytest.fixture(autouse=True)
def logger_disconnected():
    """Keep a state connected by one test from leaking into the next"""
    yield
    state_connectToLogger(None)
