"""Project discovery.

Walk-up finder locates the nearest ``pyproject.toml`` (like git finds
``.git/``); its directory is the project root that relative policy paths
are resolved against. ``PKGBOUNDARIES_PYPROJECT`` overrides discovery.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_ENV_VAR = "PKGBOUNDARIES_PYPROJECT"
TOOL_SECTION = "pkgboundaries"


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for pyproject.toml.

    Returns the path to the file, or None if not found.
    """
    env_path = os.environ.get(PYPROJECT_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / PYPROJECT_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_tool_section(path: Path) -> dict[str, Any]:
    """Return the ``[tool.pkgboundaries]`` table of *path* (empty if absent).

    Raises:
        tomllib.TOMLDecodeError: if the file is not valid TOML.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    section = data.get("tool", {}).get(TOOL_SECTION, {})
    if not isinstance(section, dict):
        return {}
    # TOML tables conventionally use kebab-case keys.
    return {key.replace("-", "_"): value for key, value in section.items()}


def resolve_policy_path(project_root: Path, policy_file: str | Path) -> Path:
    """Resolve *policy_file* against *project_root* unless it is absolute."""
    p = Path(policy_file).expanduser()
    if p.is_absolute():
        return p
    return project_root / p
