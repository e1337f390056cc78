from __future__ import annotations

import os

import pytest

os.environ.setdefault("APP_ENV", "testing")

from tests.fakes import InMemoryTimeEntries


@pytest.fixture
def entries_repo() -> InMemoryTimeEntries:
    return InMemoryTimeEntries()
