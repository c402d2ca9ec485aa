from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.docs_builder import DocsTreeBuilder


@pytest.fixture
def docs(tmp_path: Path) -> DocsTreeBuilder:
    """Provide a reusable docs tree builder rooted at the pytest tmp_path."""
    return DocsTreeBuilder(tmp_path)
