from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .schemas import DEFAULT_SLOTS


class PathsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    models_root: str = "models"
    mapping_file_name: str = "animations.json"
    anims_dir_name: str = "anims"

    @field_validator("models_root", "mapping_file_name", "anims_dir_name")
    @classmethod
    def validate_not_empty(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("paths fields must not be empty")
        return normalized

    @field_validator("mapping_file_name", "anims_dir_name")
    @classmethod
    def validate_bare_name(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("paths.mapping_file_name and paths.anims_dir_name must be bare names")
        return value


class SlotsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    names: list[str] = Field(default_factory=lambda: list(DEFAULT_SLOTS))
    labels: dict[str, str] = Field(default_factory=dict)
    file_suffix: str = ".vmd"

    @field_validator("names")
    @classmethod
    def validate_names(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for name in value:
            clean = name.strip()
            if not clean:
                raise ValueError("slots.names must not contain empty names")
            if clean not in normalized:
                normalized.append(clean)
        if not normalized:
            raise ValueError("slots.names must not be empty")
        return normalized

    @field_validator("file_suffix")
    @classmethod
    def validate_file_suffix(cls, value: str) -> str:
        normalized = value.strip().lower()
        if len(normalized) < 2 or not normalized.startswith("."):
            raise ValueError("slots.file_suffix must look like '.vmd'")
        return normalized

    @model_validator(mode="after")
    def validate_labels(self) -> SlotsConfig:
        unknown = sorted(set(self.labels) - set(self.names))
        if unknown:
            raise ValueError(f"slots.labels has unknown slots: {', '.join(unknown)}")
        return self

    def label_for(self, slot: str) -> str:
        label = self.labels.get(slot, "").strip()
        return label or slot


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    paths: PathsConfig = Field(default_factory=PathsConfig)
    slots: SlotsConfig = Field(default_factory=SlotsConfig)


def load_config(path: str | Path) -> AppConfig:
    raw = Path(path).read_text(encoding="utf-8")
    payload = _parse_yaml_or_json(raw)
    try:
        return AppConfig.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc


def _parse_yaml_or_json(raw: str) -> dict[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        try:
            parsed = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ValueError(f"Configuration is neither JSON nor YAML: {exc}") from exc
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError("Configuration root must be an object.")
    return parsed
