from __future__ import annotations

from pathlib import Path

import pytest

from hxlint.documents import DocumentSet, parse_document
from hxlint.runtime import telemetry

FIXTURES = Path(__file__).parent / "fixtures"

telemetry.configure(preset="quiet")


@pytest.fixture
def helix_dir() -> Path:
    return FIXTURES / "helix"


def make_set(*texts: str) -> DocumentSet:
    return DocumentSet(
        parse_document(text, path=Path(f"doc{index}.toml"))
        for index, text in enumerate(texts)
    )
