"""Persistence layer: store interface and the properties-file implementation."""

from .base import StoreProtocol
from .properties_store import Editor, PropertiesStore, StoredField, open_store

__all__ = ["StoreProtocol", "PropertiesStore", "Editor", "StoredField", "open_store"]
