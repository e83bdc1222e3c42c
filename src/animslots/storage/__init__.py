"""Storage layer for per-model animation slot mappings."""

from .mapping_store import MappingStore

__all__ = ["MappingStore"]
