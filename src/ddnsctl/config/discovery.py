"""Locate ``ddnsctl.toml``.

``DDNSCTL_CONFIG`` names the file explicitly; otherwise the current
directory and each of its ancestors is checked in turn.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "ddnsctl.toml"
CONFIG_ENV_VAR = "DDNSCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``ddnsctl.toml`` at or above *start*, or None.

    An explicit ``DDNSCTL_CONFIG`` wins outright: if it does not point at
    an existing file the result is None, with no fallback search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        explicit = Path(override).expanduser()
        return explicit if explicit.is_file() else None

    here = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (here, *here.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )
