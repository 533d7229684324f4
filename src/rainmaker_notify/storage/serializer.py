"""
Blob encoding for lists of models.

Lists are stored as JSON arrays of field-tagged objects.
"""

from typing import List, Sequence, TypeVar

from pydantic import TypeAdapter, ValidationError

from .exceptions import SerializationError

T = TypeVar("T")


def list_adapter(model: type) -> TypeAdapter:
    """Build the adapter used to encode and decode a list of `model`."""
    return TypeAdapter(List[model])


def encode_list(adapter: TypeAdapter, items: Sequence[T]) -> bytes:
    """
    Encode a list of models.
    
    Raises:
        SerializationError: If the items cannot be serialized
    """
    try:
        return adapter.dump_json(list(items), by_alias=True)
    except (ValueError, TypeError) as e:
        raise SerializationError(f"Cannot encode {len(items)} item(s): {e}") from e


def decode_list(adapter: TypeAdapter, data: bytes) -> List[T]:
    """
    Decode a list of models.
    
    Raises:
        SerializationError: If the data is not a valid encoded list
    """
    try:
        return adapter.validate_json(data)
    except ValidationError as e:
        raise SerializationError(
            f"Cannot decode stored data ({e.error_count()} error(s)): {e}"
        ) from e
    except ValueError as e:
        raise SerializationError(f"Cannot decode stored data: {e}") from e
