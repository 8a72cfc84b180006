"""
JSON encoding for values that are not plain str/bool/int/float.
Backed by pydantic TypeAdapter so models, dataclasses, enums and typed
containers round-trip through a single string value.
"""

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic.errors import PydanticSchemaGenerationError, PydanticUserError

# Everything to_json/from_json raise for a bad value or an unsupported type:
# ValidationError and PydanticSerializationError are ValueErrors, schema
# generation failures are PydanticUserErrors.
CODEC_ERRORS = (ValueError, TypeError, PydanticUserError, PydanticSchemaGenerationError)


@lru_cache(maxsize=128)
def _cached_adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def _adapter(type_: Any) -> TypeAdapter:
    try:
        hash(type_)
    except TypeError:
        # unhashable type hints (rare) are built fresh every time
        return TypeAdapter(type_)
    return _cached_adapter(type_)


def to_json(value: Any) -> str:
    """
    Serialize value to compact JSON text.
    Raises one of CODEC_ERRORS when pydantic cannot handle the value.
    """
    return _adapter(type(value)).dump_json(value).decode("utf-8")


def from_json(text: str, type_: Any) -> Any:
    """
    Parse JSON text into type_.
    Raises pydantic.ValidationError (a ValueError) when the text does not fit,
    PydanticSchemaGenerationError when pydantic has no schema for type_.
    """
    return _adapter(type_).validate_json(text)
