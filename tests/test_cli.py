from __future__ import annotations

import json

from typer.testing import CliRunner

from animslots_cli.cli import app


def _prepare_model(tmp_path) -> None:
    anims_dir = tmp_path / "models" / "alice" / "anims"
    anims_dir.mkdir(parents=True)
    (anims_dir / "my_idle.vmd").write_text("x", encoding="utf-8")
    (anims_dir / "walk_v2.vmd").write_text("x", encoding="utf-8")


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "--help" in result.output


def test_cli_set_show_and_unset(tmp_path) -> None:
    _prepare_model(tmp_path)
    runner = CliRunner()
    root = ["--models-root", str(tmp_path / "models")]

    result = runner.invoke(app, [*root, "set", "alice", "idle", "my_idle.vmd"])
    assert result.exit_code == 0
    assert "idle -> my_idle.vmd" in result.output

    mapping_file = tmp_path / "models" / "alice" / "animations.json"
    assert json.loads(mapping_file.read_text(encoding="utf-8")) == {"idle": "my_idle.vmd"}

    result = runner.invoke(app, [*root, "show", "alice"])
    assert result.exit_code == 0
    assert "my_idle.vmd" in result.output
    assert "1 / " in result.output

    result = runner.invoke(app, [*root, "unset", "alice", "idle"])
    assert result.exit_code == 0
    assert json.loads(mapping_file.read_text(encoding="utf-8")) == {}


def test_cli_set_rejects_unknown_slot_and_paths(tmp_path) -> None:
    runner = CliRunner()
    root = ["--models-root", str(tmp_path / "models")]

    result = runner.invoke(app, [*root, "set", "alice", "flying", "a.vmd"])
    assert result.exit_code == 1

    result = runner.invoke(app, [*root, "set", "alice", "idle", "../a.vmd"])
    assert result.exit_code == 1

    result = runner.invoke(app, [*root, "set", "../escape", "idle", "a.vmd"])
    assert result.exit_code == 1


def test_cli_files_and_locate(tmp_path) -> None:
    _prepare_model(tmp_path)
    runner = CliRunner()
    root = ["--models-root", str(tmp_path / "models")]

    result = runner.invoke(app, [*root, "files", "alice"])
    assert result.exit_code == 0
    assert "my_idle.vmd" in result.output
    assert "files=2" in result.output

    result = runner.invoke(app, [*root, "locate", "alice", "walk"])
    assert result.exit_code == 1

    runner.invoke(app, [*root, "set", "alice", "walk", "walk_v2.vmd"])
    result = runner.invoke(app, [*root, "locate", "alice", "walk"])
    assert result.exit_code == 0
    assert "walk_v2.vmd" in result.output


def test_cli_clear_removes_every_slot(tmp_path) -> None:
    _prepare_model(tmp_path)
    runner = CliRunner()
    root = ["--models-root", str(tmp_path / "models")]
    runner.invoke(app, [*root, "set", "alice", "idle", "my_idle.vmd"])
    runner.invoke(app, [*root, "set", "alice", "walk", "walk_v2.vmd"])

    result = runner.invoke(app, [*root, "clear", "alice"])

    assert result.exit_code == 0
    mapping_file = tmp_path / "models" / "alice" / "animations.json"
    assert json.loads(mapping_file.read_text(encoding="utf-8")) == {}


def test_cli_slots_uses_config_labels(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"slots": {"names": ["idle", "walk"], "labels": {"idle": "Standing"}}}),
        encoding="utf-8",
    )
    runner = CliRunner()

    result = runner.invoke(app, ["--config", str(config_path), "slots"])

    assert result.exit_code == 0
    assert "idle\tStanding" in result.output
    assert "walk\twalk" in result.output


def test_cli_invalid_config_exits_with_error(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"unknown": True}), encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["--config", str(config_path), "slots"])

    assert result.exit_code == 1
