"""Version string for the tagging engine and the dev-build switch that drives debug logging."""
from __future__ import annotations

import os
import re
from typing import Optional

__all__ = ["__version__", "is_dev_build", "dev_mode_override", "DEV_MODE_ENV_VAR"]

__version__ = "0.3.1-dev"
DEV_MODE_ENV_VAR = "SCRIPT_BREAKDOWN_DEV_MODE"

_ENV_FLAGS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}
# "1.0-dev", "1.0.dev3", "2.0-dev-rc" or a bare "dev".
_DEV_SEGMENT = re.compile(r"(?:^|[.-])dev\d*(?=$|[.-])")


def dev_mode_override() -> Optional[bool]:
    """Forced on/off from the environment; None when unset or not a recognised flag."""

    raw = os.environ.get(DEV_MODE_ENV_VAR)
    if raw is None:
        return None
    return _ENV_FLAGS.get(raw.strip().lower())


def is_dev_build(version: Optional[str] = None) -> bool:
    override = dev_mode_override()
    if override is not None:
        return override
    identifier = (version or __version__ or "").strip().lower()
    return _DEV_SEGMENT.search(identifier) is not None
