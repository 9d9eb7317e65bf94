"""Render the tokens of a parameter store as a table.

Uses a Rich table when Rich is installed and a fixed-width plain-text
table on stderr otherwise.  Purely presentational: no parsing happens
here.
"""

from __future__ import annotations

import sys

from argsugar.cli.console import console
from argsugar.core.parameters import Parameters

SWITCH: str = "switch"
VALUE: str = "value"


# ---------------------------------------------------------------------------
# Row collection (pure)
# ---------------------------------------------------------------------------

def token_rows(parameters: Parameters) -> list[tuple[str, str, str]]:
    """Return ``(index, token, role)`` rows for every token.

    A token is a *switch* when it starts with a configured prefix.  With
    an empty switch set there is no way to tell names from values, so
    every token is reported as a value.
    """
    rows: list[tuple[str, str, str]] = []
    for index, token in enumerate(parameters):
        is_switch = bool(parameters.switches) and parameters.is_flag(token)
        rows.append((str(index), token, SWITCH if is_switch else VALUE))
    return rows


def _describe_switches(parameters: Parameters) -> str:
    if not parameters.switches:
        return "switches: (none)"
    return "switches: " + " ".join(parameters.switches)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _print_plain_table(rows: list[tuple[str, str, str]], caption: str) -> None:
    print("\nargsugar tokens", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'#':>4}  {'Token':<38} {'Role':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for index, token, role in rows:
        print(f"{index:>4}  {token:<38} {role:<8}", file=sys.stderr)
    print(caption, file=sys.stderr)
    print(file=sys.stderr)


def render_tokens(parameters: Parameters) -> None:
    """Print every token of *parameters* with its position and role."""
    rows = token_rows(parameters)
    caption = _describe_switches(parameters)

    try:
        from rich.markup import escape
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_table(rows, caption)
        return

    table = Table(
        title="argsugar tokens",
        caption=escape(caption),
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=4)
    table.add_column("Token", min_width=12)
    table.add_column("Role", justify="center", min_width=8)

    for index, token, role in rows:
        style = "bold" if role == SWITCH else None
        table.add_row(index, escape(token), role, style=style)

    console.print()
    console.print(table)
    console.print()
