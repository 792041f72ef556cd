"""Per-project environment variables for the supervised child.

The project's .env file is read into a plain dict and handed to the child at
launch; ``os.environ`` of the supervisor is left untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def load_project_env(project_dir: Path, env_file: str = ".env") -> dict[str, str]:
    """Read *env_file* relative to the project and return its variables."""
    if not env_file:
        return {}
    path = project_dir / env_file
    if not path.exists():
        return {}
    raw = dotenv_values(path)
    values = {k: v for k, v in raw.items() if v is not None}
    logger.debug("Loaded %d variables from %s", len(values), path)
    return values
