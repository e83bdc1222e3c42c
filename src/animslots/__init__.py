"""Animation slot mappings for model directories."""

from .config import AppConfig, load_config
from .editor import MappingEditor
from .paths import PathResolver
from .playback import AnimationLocator
from .schemas import AnimSlot, EditorStats, SlotEntry
from .storage import MappingStore

__all__ = [
    "AnimSlot",
    "AnimationLocator",
    "AppConfig",
    "EditorStats",
    "MappingEditor",
    "MappingStore",
    "PathResolver",
    "SlotEntry",
    "load_config",
]
