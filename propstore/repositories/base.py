"""Structural interface shared by stores that field accessors can bind to."""

from typing import Any, Optional, Protocol


class StoreProtocol(Protocol):
    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]: ...

    def get(self, key: str, default: Any, type_: Any = None) -> Any: ...

    def put(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...

    def __contains__(self, key: object) -> bool: ...
