"""Environment-driven settings for the ``argsugar`` executable.

Only the CLI layer reads the environment.  The core receives the
resulting values explicitly.

Variables
---------
``ARGSUGAR_SWITCHES``
    Space-separated switch prefixes.  Set but empty means *no*
    switches; unset means the defaults (``- -- /``).
``ARGSUGAR_LOG_LEVEL``
    Standard logging level name.  Defaults to ``WARNING``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from argsugar.core.models import DEFAULT_SWITCHES

SWITCHES_VARIABLE: str = "ARGSUGAR_SWITCHES"
LOG_LEVEL_VARIABLE: str = "ARGSUGAR_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved runtime configuration."""

    switches: tuple[str, ...] = DEFAULT_SWITCHES
    log_level: int = logging.WARNING


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *environ* (``os.environ`` by default).

    Unknown log-level names fall back to ``WARNING``.
    """
    env = os.environ if environ is None else environ

    raw_switches = env.get(SWITCHES_VARIABLE)
    switches = DEFAULT_SWITCHES if raw_switches is None else tuple(raw_switches.split())

    level_name = env.get(LOG_LEVEL_VARIABLE, "WARNING").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    return Settings(switches=switches, log_level=level)
