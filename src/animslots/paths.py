from __future__ import annotations

from pathlib import Path

from .config import AppConfig


class PathResolver:
    """Maps model names to their directory, mapping file and anims/ folder."""

    def __init__(
        self,
        models_root: str | Path,
        *,
        mapping_file_name: str = "animations.json",
        anims_dir_name: str = "anims",
    ) -> None:
        if not mapping_file_name.strip():
            raise ValueError("mapping_file_name must not be empty")
        if not anims_dir_name.strip():
            raise ValueError("anims_dir_name must not be empty")

        self.models_root = Path(models_root)
        self.mapping_file_name = mapping_file_name
        self.anims_dir_name = anims_dir_name

    @classmethod
    def from_config(cls, config: AppConfig) -> PathResolver:
        return cls(
            config.paths.models_root,
            mapping_file_name=config.paths.mapping_file_name,
            anims_dir_name=config.paths.anims_dir_name,
        )

    def model_dir(self, model_name: str) -> Path:
        name = model_name.strip()
        if not name:
            raise ValueError("model_name must not be empty")
        if Path(name).name != name or name in {".", ".."}:
            raise ValueError(f"model_name must be a bare directory name: {model_name!r}")
        return (self.models_root / name).absolute()

    def mapping_file(self, model_dir: str | Path) -> Path:
        return Path(model_dir) / self.mapping_file_name

    def anims_dir(self, model_dir: str | Path) -> Path:
        return Path(model_dir) / self.anims_dir_name

    @staticmethod
    def ensure_directory(path: str | Path) -> Path:
        directory = Path(path)
        directory.mkdir(parents=True, exist_ok=True)
        return directory
