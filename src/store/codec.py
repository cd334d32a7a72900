"""Value codecs for stored records.

A codec converts between in-memory values and the bytes of one record.
Any object with matching ``encode``/``decode`` methods satisfies ``Codec``.
"""

from __future__ import annotations

import json
from typing import Any, Protocol, TypeVar

from core.constants import JSON_INDENT, TEXT_ENCODING
from core.errors import DecodeError, EncodeError, PrefStoreDependencyError

T = TypeVar("T")


class Codec(Protocol[T]):
    """Encode values to bytes and decode bytes back to values."""

    def encode(self, value: T) -> bytes:
        """Serialize ``value`` into record bytes."""
        ...

    def decode(self, data: bytes) -> T:
        """Deserialize record bytes into a value."""
        ...


class JsonCodec:
    """UTF-8 JSON codec for plain JSON-compatible values."""

    def encode(self, value: Any) -> bytes:
        """Serialize a JSON-compatible value.

        Raises:
            EncodeError: If value is not JSON serializable.
        """
        try:
            text = json.dumps(value, indent=JSON_INDENT, sort_keys=True, allow_nan=False)
        except (TypeError, ValueError) as error:
            raise EncodeError(
                f"Failed to encode value of type {type(value).__name__} as JSON: {error}."
            ) from error
        return (text + "\n").encode(TEXT_ENCODING)

    def decode(self, data: bytes) -> Any:
        """Deserialize UTF-8 JSON bytes.

        Raises:
            DecodeError: If bytes are not valid UTF-8 JSON.
        """
        try:
            return json.loads(data.decode(TEXT_ENCODING))
        except UnicodeDecodeError as error:
            raise DecodeError(f"Stored record is not valid UTF-8: {error}.") from error
        except json.JSONDecodeError as error:
            raise DecodeError(
                f"Failed to parse stored JSON at line {error.lineno} column {error.colno}: "
                f"{error.msg}."
            ) from error


class YamlCodec:
    """UTF-8 YAML codec backed by PyYAML safe dump/load."""

    def encode(self, value: Any) -> bytes:
        """Serialize a YAML-safe value.

        Raises:
            EncodeError: If value cannot be represented with safe YAML tags.
        """
        yaml = _import_yaml()
        try:
            text = yaml.safe_dump(value, sort_keys=True, allow_unicode=True)
        except yaml.YAMLError as error:
            raise EncodeError(
                f"Failed to encode value of type {type(value).__name__} as YAML: {error}."
            ) from error
        return text.encode(TEXT_ENCODING)

    def decode(self, data: bytes) -> Any:
        """Deserialize UTF-8 YAML bytes.

        Raises:
            DecodeError: If bytes are not valid UTF-8 YAML.
        """
        yaml = _import_yaml()
        try:
            return yaml.safe_load(data.decode(TEXT_ENCODING))
        except UnicodeDecodeError as error:
            raise DecodeError(f"Stored record is not valid UTF-8: {error}.") from error
        except yaml.YAMLError as error:
            raise DecodeError(f"Failed to parse stored YAML: {error}.") from error


def _import_yaml() -> Any:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise PrefStoreDependencyError(
            "YAML record support requires PyYAML. Install with 'pip install pyyaml==6.0.2'."
        ) from error
    return yaml
