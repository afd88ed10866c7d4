"""Environment loading helpers.

Outside of CI, the `INPUT_*` variables and the token are usually kept in
.env files instead of being exported by hand. Two layers are read:

  ~/.config/schemasync/.env    (per-user defaults, e.g. the GitHub token)
  <project>/.env               (per-repository inputs, e.g. INPUT_SCHEMA)

Precedence: variables already in the process environment > project .env >
user .env. A .env file never replaces something the shell (or the CI
runner) exported.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, MutableMapping
from pathlib import Path

from dotenv import dotenv_values


def user_env_path() -> Path:
    """Return the per-user .env path, honouring XDG_CONFIG_HOME."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "schemasync" / ".env"


def _values(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if k and v is not None}


def load_layered_env(
    project_dir: Path | None = None,
    *,
    env_paths: Iterable[Path] | None = None,
    environ: MutableMapping[str, str] | None = None,
) -> set[str]:
    """Load .env files into the environment without overriding it.

    Args:
        project_dir: Directory holding the project .env (defaults to cwd)
        env_paths: Files to load, lowest precedence first
        environ: Mapping to update (defaults to os.environ)

    Returns:
        Names of the variables that were set from files
    """
    if environ is None:
        environ = os.environ
    if env_paths is None:
        env_paths = [user_env_path(), (project_dir or Path.cwd()) / ".env"]

    preexisting = set(environ)
    loaded: set[str] = set()
    for path in env_paths:
        for key, value in _values(Path(path)).items():
            if key in preexisting:
                continue
            environ[key] = value
            loaded.add(key)
    return loaded
