"""Unified settings — CLI flags, env vars, and pyproject.toml in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PKGBOUNDARIES_*`` prefix
  3. TOML table   — ``[tool.pkgboundaries]`` of the nearest pyproject.toml
  4. Code defaults

Uses Pydantic Settings v2 with a custom :class:`PyprojectSettingsSource`
that reuses the walk-up discovery from :mod:`pkgboundaries.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from pkgboundaries.config.discovery import find_pyproject, read_tool_section, resolve_policy_path
from pkgboundaries.infrastructure.policy_file import DEFAULT_POLICY_FILENAME
from pkgboundaries.infrastructure.sources import DEFAULT_EXCLUDE


class PyprojectSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the ``[tool.pkgboundaries]`` table of pyproject.toml."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = read_tool_section(toml_path)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the pyproject path during construction.
_tls = threading.local()


class BoundarySettings(BaseSettings):
    """Settings for one pkgboundaries invocation, frozen after construction.

    Attributes:
        project_root: Directory of the discovered pyproject.toml, or CWD.
        pyproject_path: The pyproject.toml that was read, if any.
        policy_file: Policy document path; relative paths resolve
            against *project_root*.
        skip_tests: Exclude test units from analysis.
        exclude: Directory names never descended into.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PKGBOUNDARIES_",
        "extra": "ignore",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    pyproject_path: Path | None = None

    # --- Analysis ---
    policy_file: Path = Path(DEFAULT_POLICY_FILENAME)
    skip_tests: bool = False
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))

    # --- Output ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @property
    def policy_path(self) -> Path:
        return resolve_policy_path(self.project_root, self.policy_file)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the pyproject source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            PyprojectSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        policy_file: str | None = None,
        project_root: Path | None = None,
        skip_tests: bool = False,
        **cli_flags: Any,
    ) -> BoundarySettings:
        """Construct settings from a CLI invocation.

        An explicit *policy_file* is taken relative to the CWD. Boolean
        flags that default to off only override lower layers when set.
        """
        toml_path = find_pyproject(project_root)
        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        overrides: dict[str, Any] = dict(cli_flags)
        if policy_file:
            overrides["policy_file"] = Path(policy_file).resolve()
        if skip_tests:
            overrides["skip_tests"] = True

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                pyproject_path=toml_path,
                **overrides,
            )
        finally:
            _tls.toml_path = None
