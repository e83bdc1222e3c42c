from __future__ import annotations

import logging
import threading
from pathlib import Path

from animslots.paths import PathResolver
from animslots.storage import MappingStore

logger = logging.getLogger(__name__)


class AnimationLocator:
    """Resolves a model's slot to the animation file that should be played.

    The mapped file name is looked up in the model's anims/ folder first and
    then in the model directory itself. Results are cached per (model, slot)
    until the model is invalidated, typically after its mapping is saved.
    """

    def __init__(self, store: MappingStore, resolver: PathResolver) -> None:
        self.store = store
        self.resolver = resolver
        self._resolved: dict[tuple[str, str], Path | None] = {}
        self._generations: dict[str, int] = {}
        self._epoch = 0
        self._lock = threading.Lock()

    def locate(self, model_dir: str, slot: str) -> Path | None:
        key = (model_dir, slot)
        with self._lock:
            if key in self._resolved:
                return self._resolved[key]
            generation = self._generation(model_dir)

        path = self._find(model_dir, slot)
        with self._lock:
            # Drop results computed before an invalidate of this model.
            if self._generation(model_dir) == generation:
                self._resolved[key] = path
        return path

    def invalidate(self, model_dir: str) -> None:
        with self._lock:
            self._generations[model_dir] = self._generations.get(model_dir, 0) + 1
            for key in [key for key in self._resolved if key[0] == model_dir]:
                del self._resolved[key]

    def invalidate_all(self) -> None:
        with self._lock:
            self._epoch += 1
            self._resolved.clear()

    def _generation(self, model_dir: str) -> tuple[int, int]:
        return self._epoch, self._generations.get(model_dir, 0)

    def _find(self, model_dir: str, slot: str) -> Path | None:
        file_name = self.store.get_mapped_file(model_dir, slot)
        if file_name is None:
            return None

        candidates = [
            self.resolver.anims_dir(model_dir) / file_name,
            Path(model_dir) / file_name,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return candidate

        logger.debug(
            "animation_locator missing slot=%s file=%s model_dir=%s",
            slot,
            file_name,
            model_dir,
        )
        return None
