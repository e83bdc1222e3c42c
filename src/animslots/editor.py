from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from animslots.config import SlotsConfig
from animslots.paths import PathResolver
from animslots.schemas import EditorStats, SlotEntry
from animslots.storage import MappingStore

logger = logging.getLogger(__name__)

SavedCallback = Callable[[str], None]


class MappingEditor:
    """Edit session for one model's slot mapping.

    Edits stay in a local buffer until ``save`` commits the whole buffer with a
    single ``MappingStore.save_mapping`` call.
    """

    def __init__(
        self,
        store: MappingStore,
        resolver: PathResolver,
        model_name: str,
        *,
        slots: SlotsConfig | None = None,
        on_saved: Iterable[SavedCallback] = (),
    ) -> None:
        slots_config = slots if slots is not None else SlotsConfig()

        self.store = store
        self.resolver = resolver
        self.model_name = model_name
        self.model_dir = str(resolver.model_dir(model_name))
        self.file_suffix = slots_config.file_suffix
        self.slots = [
            SlotEntry(name=name, display_name=slots_config.label_for(name))
            for name in slots_config.names
        ]
        self.available_files: list[str] = []
        self.edit_mapping: dict[str, str] = {}
        self._on_saved = list(on_saved)

        self.scan_available_files()
        self.reload()

    @property
    def slot_names(self) -> list[str]:
        return [slot.name for slot in self.slots]

    def scan_available_files(self) -> list[str]:
        anims_dir = self.resolver.anims_dir(self.model_dir)
        try:
            self.resolver.ensure_directory(anims_dir)
        except OSError as exc:
            logger.warning("mapping_editor cannot create anims_dir=%s error=%s", anims_dir, exc)

        found: list[str] = []
        for directory in [anims_dir, Path(self.model_dir)]:
            for name in self._list_animation_files(directory):
                if name not in found:
                    found.append(name)

        self.available_files = sorted(found, key=str.lower)
        return self.available_files

    def reload(self) -> None:
        self.edit_mapping = dict(self.store.get_mapping(self.model_dir))

    def refresh(self) -> list[str]:
        return self.scan_available_files()

    def assign(self, slot: str, file_name: str) -> None:
        if slot not in self.slot_names:
            raise ValueError(f"unknown slot: {slot}")
        if not file_name:
            raise ValueError("file_name must not be empty")
        self.edit_mapping[slot] = file_name

    def clear_slot(self, slot: str) -> None:
        self.edit_mapping.pop(slot, None)

    def clear_all(self) -> None:
        self.edit_mapping.clear()

    def mapped_file(self, slot: str) -> str | None:
        return self.edit_mapping.get(slot) or None

    def save(self) -> dict[str, str]:
        committed = dict(self.edit_mapping)
        self.store.save_mapping(self.model_dir, committed)
        for callback in self._on_saved:
            callback(self.model_dir)

        logger.info(
            "mapping_editor saved model=%s entries=%d",
            self.model_name,
            len(committed),
        )
        return committed

    def stats(self) -> EditorStats:
        mapped = sum(1 for value in self.edit_mapping.values() if value)
        return EditorStats(
            mapped=mapped,
            slots=len(self.slots),
            available_files=len(self.available_files),
        )

    def _list_animation_files(self, directory: Path) -> list[str]:
        if not directory.is_dir():
            return []
        return [
            path.name
            for path in directory.iterdir()
            if path.is_file() and path.name.lower().endswith(self.file_suffix)
        ]
