from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from animslots.paths import PathResolver

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, str] = MappingProxyType({})


class MappingStore:
    """Write-through cache of slot -> file mappings keyed by model directory.

    Directory keys are used verbatim. Each cached mapping is a plain dict that
    is only touched through single dict operations (item assignment, ``pop``,
    ``copy``), so point updates to different slots of the same directory can
    run from several threads without an extra lock. The fill lock only guards
    the get-or-create of cache entries so that a key is loaded once.

    Reads never raise for disk problems: a missing or corrupt file resolves to
    an empty mapping and a log line. Writes update the cache first and then
    persist synchronously; a failed write is logged and the cache stays the
    visible truth. Bulk saves replace the entry under the fill lock, so a
    concurrent first load can never put older disk state back over them.
    """

    def __init__(self, resolver: PathResolver) -> None:
        self.resolver = resolver
        self._cache: dict[str, dict[str, str]] = {}
        self._fill_lock = threading.Lock()

    def get_mapping(self, directory: str | None) -> Mapping[str, str]:
        if not directory:
            return _EMPTY
        return MappingProxyType(self._entry(directory).copy())

    def get_mapped_file(self, directory: str | None, slot: str) -> str | None:
        return self.get_mapping(directory).get(slot)

    def set_mapping(self, directory: str, slot: str, file_name: str | None) -> None:
        if not directory:
            raise ValueError("directory must not be empty")
        if not slot:
            raise ValueError("slot must not be empty")

        mapping = self._entry(directory)
        if file_name:
            mapping[slot] = file_name
        else:
            mapping.pop(slot, None)

        self._save_to_disk(directory, mapping.copy())

    def save_mapping(self, directory: str, mapping: Mapping[str | None, str | None]) -> None:
        if not directory:
            raise ValueError("directory must not be empty")

        cleaned = _valid_entries(dict(mapping))
        # An in-flight fill for this key must not overwrite the saved entry.
        with self._fill_lock:
            self._cache[directory] = cleaned
        self._save_to_disk(directory, cleaned.copy())

    def invalidate(self, directory: str) -> None:
        self._cache.pop(directory, None)

    def invalidate_all(self) -> None:
        self._cache.clear()

    def is_cached(self, directory: str) -> bool:
        return directory in self._cache

    def _entry(self, directory: str) -> dict[str, str]:
        mapping = self._cache.get(directory)
        if mapping is not None:
            return mapping

        with self._fill_lock:
            mapping = self._cache.get(directory)
            if mapping is None:
                mapping = self._load_from_disk(directory)
                self._cache[directory] = mapping
            return mapping

    def _load_from_disk(self, directory: str) -> dict[str, str]:
        config_file = self.resolver.mapping_file(directory)
        try:
            payload = json.loads(config_file.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug("mapping_store miss path=%s reason=not_found", config_file)
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("mapping_store load failed path=%s error=%s", config_file, exc)
            return {}

        if payload is None:
            return {}
        if not isinstance(payload, dict):
            logger.warning(
                "mapping_store load failed path=%s error=root is %s, expected object",
                config_file,
                type(payload).__name__,
            )
            return {}

        mapping = _valid_entries(payload)
        logger.info("mapping_store load path=%s entries=%d", config_file.name, len(mapping))
        return mapping

    def _save_to_disk(self, directory: str, mapping: dict[str, str]) -> None:
        config_file = self.resolver.mapping_file(directory)
        tmp_path: Path | None = None
        try:
            self.resolver.ensure_directory(config_file.parent)
            fd, tmp_name = tempfile.mkstemp(
                dir=config_file.parent,
                prefix=f".{config_file.name}.",
                suffix=".tmp",
            )
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(mapping, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_path, config_file)
            tmp_path = None
        except OSError as exc:
            logger.error("mapping_store save failed path=%s error=%s", config_file, exc)
        else:
            logger.debug("mapping_store save path=%s entries=%d", config_file.name, len(mapping))
        finally:
            if tmp_path is not None:
                try:
                    tmp_path.unlink(missing_ok=True)
                except OSError as exc:
                    logger.warning("mapping_store cleanup failed path=%s error=%s", tmp_path, exc)


def _valid_entries(payload: dict[object, object]) -> dict[str, str]:
    cleaned: dict[str, str] = {}
    for slot, file_name in payload.items():
        if not isinstance(slot, str) or not isinstance(file_name, str):
            continue
        if not slot or not file_name:
            continue
        cleaned[slot] = file_name
    return cleaned
