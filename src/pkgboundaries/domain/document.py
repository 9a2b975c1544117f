"""Pydantic models for the persisted policy document.

The document uses PascalCase keys (``Layers``, ``PackageNames``, ...).
Keys are matched case-insensitively on load and always written back in
canonical form.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pkgboundaries.domain.sets import OrderedSet


def _canonical_keys(data: Any, model: type[BaseModel]) -> Any:
    """Rename keys of *data* to the model's aliases, ignoring case."""
    if not isinstance(data, dict):
        return data
    aliases = {
        (info.alias or name).lower(): info.alias or name for name, info in model.model_fields.items()
    }
    out: dict[str, Any] = {}
    for key, value in data.items():
        canonical = aliases.get(key.lower(), key) if isinstance(key, str) else key
        # First spelling wins, like the rest of the document.
        out.setdefault(canonical, value)
    return out


def _dedupe(values: list[str] | None) -> list[str] | None:
    if values is None:
        return None
    return OrderedSet.from_list(values).to_list()


class LayerDocument(BaseModel):
    """One entry of ``Layers``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="Name", min_length=1)
    package_names: list[str] | None = Field(default=None, alias="PackageNames")
    package_name_patterns: list[str] | None = Field(default=None, alias="PackageNamePatterns")

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        return _canonical_keys(data, cls)

    @field_validator("package_names", "package_name_patterns")
    @classmethod
    def _collapse_duplicates(cls, values: list[str] | None) -> list[str] | None:
        return _dedupe(values)


class RuleDocument(BaseModel):
    """One entry of ``Rules``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    layer: str = Field(alias="Layer")
    allowed: list[str] | None = Field(default=None, alias="Allowed")
    denied: list[str] | None = Field(default=None, alias="Denied")

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        return _canonical_keys(data, cls)


class PolicyDocument(BaseModel):
    """Root of the policy document: ordered layers and ordered rules."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    layers: list[LayerDocument] | None = Field(default=None, alias="Layers")
    rules: list[RuleDocument] | None = Field(default=None, alias="Rules")

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        return _canonical_keys(data, cls)

    @field_validator("layers")
    @classmethod
    def _collapse_duplicate_layers(
        cls, layers: list[LayerDocument] | None
    ) -> list[LayerDocument] | None:
        if layers is None:
            return None
        return OrderedSet.from_list(layers, key=lambda layer: layer.name).to_list()

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with canonical keys, omitting absent optional lists."""
        return self.model_dump(by_alias=True, exclude_none=True)
