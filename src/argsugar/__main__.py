"""Allow ``python -m argsugar`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m argsugar`` behaves identically to the ``argsugar`` console
script.
"""

from __future__ import annotations

from argsugar.cli.app import cli

if __name__ == "__main__":
    cli()
