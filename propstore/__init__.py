"""propstore: typed key-value settings persisted to a properties file."""

from .config import Settings, configure_logging, get_settings
from .repositories import Editor, PropertiesStore, StoredField, StoreProtocol, open_store
from .services.properties_format import PropertiesError, PropertiesFormatError

__version__ = "1.0.0"

__all__ = [
    "Editor",
    "PropertiesError",
    "PropertiesFormatError",
    "PropertiesStore",
    "Settings",
    "StoreProtocol",
    "StoredField",
    "configure_logging",
    "get_settings",
    "open_store",
]
