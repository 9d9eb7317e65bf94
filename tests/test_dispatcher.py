"""Tests for the command dispatcher (cli/dispatcher.py).

Commands are mocked through the structural ``Command`` protocol; the
console is patched out.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from argsugar.cli import exit_codes
from argsugar.cli.dispatcher import CommandDispatcher
from argsugar.core.tokenizer import parse
from argsugar.exceptions import ArgSugarError


def _command(*, accepts: bool, code: int = 0) -> MagicMock:
    command = MagicMock()
    command.can_execute.return_value = accepts
    command.execute.return_value = code
    return command


class TestDispatch:
    def test_first_accepting_command_runs(self) -> None:
        rejecting = _command(accepts=False)
        accepting = _command(accepts=True, code=7)
        never_asked = _command(accepts=True)
        params = parse("-x")

        dispatcher = CommandDispatcher([rejecting, accepting, never_asked])

        assert dispatcher.dispatch(params) == 7
        rejecting.execute.assert_not_called()
        accepting.can_execute.assert_called_once_with(params)
        accepting.execute.assert_called_once_with(params)
        never_asked.can_execute.assert_not_called()

    def test_no_match_without_fallback(self) -> None:
        dispatcher = CommandDispatcher([_command(accepts=False)])
        assert dispatcher.dispatch(parse("")) == exit_codes.GENERAL_ERROR

    def test_no_match_with_fallback(self) -> None:
        fallback = MagicMock(return_value=3)
        params = parse("-unknown")
        dispatcher = CommandDispatcher([_command(accepts=False)], fallback=fallback)

        assert dispatcher.dispatch(params) == 3
        fallback.assert_called_once_with(params)

    def test_no_commands(self) -> None:
        assert CommandDispatcher([]).dispatch(parse("")) == exit_codes.GENERAL_ERROR

    def test_find(self) -> None:
        accepting = _command(accepts=True)
        dispatcher = CommandDispatcher([_command(accepts=False), accepting])
        assert dispatcher.find(parse("")) is accepting
        assert CommandDispatcher([]).find(parse("")) is None

    def test_commands_property(self) -> None:
        first = _command(accepts=False)
        assert CommandDispatcher([first]).commands == (first,)


class TestErrorMapping:
    @patch("argsugar.cli.dispatcher.print_error")
    def test_known_error_becomes_exit_code(self, mock_print: MagicMock) -> None:
        command = _command(accepts=True)
        error = ArgSugarError("boom", hint="retry")
        command.execute.side_effect = error

        assert CommandDispatcher([command]).dispatch(parse("")) == exit_codes.GENERAL_ERROR
        mock_print.assert_called_once_with(error)

    def test_unexpected_error_propagates(self) -> None:
        command = _command(accepts=True)
        command.execute.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            CommandDispatcher([command]).dispatch(parse(""))
