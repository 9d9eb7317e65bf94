"""Shared pytest fixtures and configuration for the argsugar test suite.

Guidelines
----------
* Core tests are pure: they touch neither the console nor stdin.
* CLI tests pass ``environ`` explicitly and replace ``sys.stdin``.
* Tests must not depend on OS state.
"""

from __future__ import annotations

import io
import sys
from collections.abc import Callable

import pytest


@pytest.fixture
def feed_stdin(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Replace ``sys.stdin`` with a pipe-like stream holding *text*."""

    def _feed(text: str) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO(text))

    return _feed


@pytest.fixture
def interactive_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make ``sys.stdin`` look like a terminal with nothing piped in."""

    class _Tty(io.StringIO):
        def isatty(self) -> bool:
            return True

    monkeypatch.setattr(sys, "stdin", _Tty(""))
