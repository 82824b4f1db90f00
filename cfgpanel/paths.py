"""
Path helpers for cfgpanel storage.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


GLOBAL_FOLDER_ENV_VAR = "CFGPANEL_HOME"


def get_global_folder(override: Optional[str | Path] = None) -> Path:
    """
    Resolve the folder that holds persisted settings data.

    Priority:
    1. Explicit override argument
    2. CFGPANEL_HOME environment variable
    3. <home>/.cfgpanel
    """
    candidate: str | Path | None = override
    if candidate is None:
        candidate = os.environ.get(GLOBAL_FOLDER_ENV_VAR)
    if candidate is None:
        candidate = Path.home() / ".cfgpanel"
    return Path(candidate).expanduser().resolve()

