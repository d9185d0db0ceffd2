"""
.env file loading for the CLI.

Variables are read from the user file (``$XDG_CONFIG_HOME/tasklist/.env``)
and then the project files (``.env``, ``.env.local``); later files win.
Nothing read from a file replaces a variable already exported in the
shell, so ``TASKLIST_PORT=8000 tasklist serve`` always beats a .env entry.
"""

import os
from collections.abc import Iterable
from pathlib import Path

from dotenv import dotenv_values

from .loader import user_config_dir


def _env_file_values(paths: Iterable[Path]) -> dict[str, str]:
    values: dict[str, str] = {}
    for path in map(Path, paths):
        if path.is_file():
            # bare "KEY" lines have no value
            values.update({k: v for k, v in dotenv_values(path).items() if v is not None})
    return values


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> None:
    """
    Export variables from the user and project .env files.

    Args:
        project_dir: Directory holding the project .env files (defaults to cwd)
        user_env_paths: Override the user .env locations
        project_env_paths: Override the project .env locations
    """
    project_dir = project_dir or Path.cwd()
    if user_env_paths is None:
        user_env_paths = [user_config_dir() / ".env"]
    if project_env_paths is None:
        project_env_paths = [project_dir / ".env", project_dir / ".env.local"]

    layered = {**_env_file_values(user_env_paths), **_env_file_values(project_env_paths)}
    for key, value in layered.items():
        os.environ.setdefault(key, value)
