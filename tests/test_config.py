from __future__ import annotations

import json

import pytest

from animslots.config import AppConfig, load_config
from animslots.schemas import DEFAULT_SLOTS


def test_default_config_is_valid() -> None:
    config = AppConfig()

    assert config.paths.mapping_file_name == "animations.json"
    assert config.paths.anims_dir_name == "anims"
    assert config.slots.names == list(DEFAULT_SLOTS)
    assert config.slots.file_suffix == ".vmd"
    assert config.slots.label_for("idle") == "idle"


def test_load_config_reads_json(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "paths": {"models_root": "data/models"},
                "slots": {"names": ["idle", "walk"], "labels": {"walk": "Walk"}},
            }
        ),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.paths.models_root == "data/models"
    assert config.slots.names == ["idle", "walk"]
    assert config.slots.label_for("walk") == "Walk"
    assert config.slots.label_for("idle") == "idle"


def test_load_config_reads_yaml(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "paths:\n"
        "  models_root: skins\n"
        "slots:\n"
        "  names: [idle, sprint, idle]\n"
        "  file_suffix: .VMD\n",
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.paths.models_root == "skins"
    assert config.slots.names == ["idle", "sprint"]
    assert config.slots.file_suffix == ".vmd"


def test_load_config_empty_file_uses_defaults(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path) == AppConfig()


@pytest.mark.parametrize(
    "payload",
    [
        {"unknown": True},
        {"slots": {"names": []}},
        {"slots": {"file_suffix": "vmd"}},
        {"slots": {"names": ["idle"], "labels": {"walk": "Walk"}}},
        {"paths": {"mapping_file_name": "nested/animations.json"}},
    ],
)
def test_load_config_rejects_invalid_payload(tmp_path, payload: dict) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(config_path)


def test_load_config_rejects_non_object_root(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="root must be an object"):
        load_config(config_path)
