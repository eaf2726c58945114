from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.directory_builder import DirectoryBuilder


@pytest.fixture
def directory_builder(tmp_path: Path) -> DirectoryBuilder:
    """Provide a reusable directory builder rooted at the pytest tmp_path."""
    return DirectoryBuilder(tmp_path)
