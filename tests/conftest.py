"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the repository root and the test helpers are importable when running from a checkout.
tests_path = Path(__file__).resolve().parent
for import_path in (tests_path.parent.as_posix(), tests_path.as_posix()):
    if import_path not in sys.path:
        sys.path.insert(0, import_path)

from game_tree import VisitLog  # noqa: E402


@pytest.fixture
def visit_log() -> VisitLog:
    return VisitLog()
