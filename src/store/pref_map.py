"""Typed preference container.

A ``PrefMap`` holds string-keyed preferences whose values are one of four
kinds: string, float, signed or unsigned 64-bit integer. It persists as a
versioned payload through any payload codec, so a ``KeyedStore[PrefMap]``
saves and loads whole maps under one key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import math
from typing import Any, Iterator

from core.constants import (
    PREF_MAP_FORMAT_VERSION,
    SIGNED_PREF_MIN,
    SIGNED_PREF_MAX,
    UNSIGNED_PREF_MAX,
)
from core.config import PrefStoreConfig
from core.errors import DecodeError, EncodeError
from paths.platform_dirs import BaseDirectoryResolver
from store.codec import Codec, JsonCodec
from store.keyed_store import KeyedStore


class PrefKind(str, Enum):
    """Kinds of values a preference can hold."""

    STRING = "string"
    FLOAT = "float"
    SIGNED = "signed"
    UNSIGNED = "unsigned"


@dataclass(frozen=True)
class Pref:
    """One typed preference value.

    Attributes:
        kind: Value kind.
        value: Python value matching ``kind``.
    """

    kind: PrefKind
    value: str | float | int

    def __post_init__(self) -> None:
        _validate_pref(self.kind, self.value)

    @classmethod
    def of_string(cls, value: str) -> "Pref":
        """Build a string preference."""
        return cls(PrefKind.STRING, value)

    @classmethod
    def of_float(cls, value: float) -> "Pref":
        """Build a float preference, widening integral values."""
        return cls(PrefKind.FLOAT, float(value))

    @classmethod
    def of_signed(cls, value: int) -> "Pref":
        """Build a signed 64-bit integer preference."""
        return cls(PrefKind.SIGNED, value)

    @classmethod
    def of_unsigned(cls, value: int) -> "Pref":
        """Build an unsigned 64-bit integer preference."""
        return cls(PrefKind.UNSIGNED, value)


@dataclass
class PrefMap:
    """Mutable mapping of preference names to typed values."""

    prefs: dict[str, Pref] = field(default_factory=dict)
    version: int = PREF_MAP_FORMAT_VERSION

    def get(self, name: str, default: Pref | None = None) -> Pref | None:
        return self.prefs.get(name, default)

    def set(self, name: str, pref: Pref) -> None:
        self.prefs[name] = pref

    def remove(self, name: str) -> Pref | None:
        return self.prefs.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self.prefs

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.prefs))

    def __len__(self) -> int:
        return len(self.prefs)

    def save(self, key: str, store: KeyedStore["PrefMap"] | None = None) -> None:
        """Persist this map under ``key``, using a default store when omitted."""
        (store or open_pref_store()).save(key, self)

    @classmethod
    def load(cls, key: str, store: KeyedStore["PrefMap"] | None = None) -> "PrefMap":
        """Load the map stored under ``key``, using a default store when omitted."""
        return (store or open_pref_store()).load(key)


class PrefMapCodec:
    """Codec for ``PrefMap`` layered over a payload codec."""

    def __init__(self, payload_codec: Codec[Any] | None = None) -> None:
        self._payload_codec = payload_codec or JsonCodec()

    def encode(self, value: PrefMap) -> bytes:
        """Serialize a map as its versioned payload.

        Raises:
            EncodeError: If value is not a PrefMap or the payload codec fails.
        """
        if not isinstance(value, PrefMap):
            raise EncodeError(
                f"PrefMapCodec can only encode PrefMap values, got {type(value).__name__}."
            )
        return self._payload_codec.encode(pref_map_to_payload(value))

    def decode(self, data: bytes) -> PrefMap:
        """Deserialize bytes into a map.

        Raises:
            DecodeError: If the payload is malformed or of an unknown version.
        """
        return pref_map_from_payload(self._payload_codec.decode(data))


def pref_map_to_payload(pref_map: PrefMap) -> dict[str, object]:
    """Serialize a map into a codec-safe payload.

    Args:
        pref_map: Map to serialize.

    Returns:
        Payload with ``version`` and ``map`` fields.
    """
    return {
        "version": pref_map.version,
        "map": {
            name: {"kind": pref.kind.value, "value": pref.value}
            for name, pref in pref_map.prefs.items()
        },
    }


def pref_map_from_payload(payload: object) -> PrefMap:
    """Deserialize a payload into a map.

    Args:
        payload: Decoded payload object.

    Returns:
        Parsed PrefMap.

    Raises:
        DecodeError: If the payload shape, version or values are invalid.
    """
    if not isinstance(payload, dict):
        raise DecodeError("Stored preferences payload must be an object at top level.")
    version = payload.get("version")
    if isinstance(version, bool) or version != PREF_MAP_FORMAT_VERSION:
        raise DecodeError(
            f"Unsupported preferences format version {version!r}; "
            f"expected {PREF_MAP_FORMAT_VERSION}."
        )
    entries = payload.get("map")
    if not isinstance(entries, dict):
        raise DecodeError("Stored preferences payload is missing its 'map' object.")
    prefs = {str(name): _pref_from_entry(str(name), entry) for name, entry in entries.items()}
    return PrefMap(prefs=prefs, version=version)


def _pref_from_entry(name: str, entry: object) -> Pref:
    if not isinstance(entry, dict):
        raise DecodeError(f"Stored preference '{name}' must be an object with kind and value.")
    try:
        kind = PrefKind(entry.get("kind"))
    except ValueError as error:
        raise DecodeError(
            f"Stored preference '{name}' has unknown kind {entry.get('kind')!r}."
        ) from error
    value = entry.get("value")
    if kind is PrefKind.FLOAT and isinstance(value, int) and not isinstance(value, bool):
        value = float(value)
    try:
        return Pref(kind, value)
    except ValueError as error:
        raise DecodeError(f"Stored preference '{name}' is invalid: {error}") from error


def _validate_pref(kind: PrefKind, value: object) -> None:
    """Check that ``value`` matches ``kind``.

    Raises:
        ValueError: If value has the wrong type or is out of range.
    """
    if kind is PrefKind.STRING:
        if not isinstance(value, str):
            raise ValueError(f"string preference requires str, got {type(value).__name__}.")
        return
    if kind is PrefKind.FLOAT:
        if not isinstance(value, float) or not math.isfinite(value):
            raise ValueError(f"float preference requires a finite float, got {value!r}.")
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{kind.value} preference requires int, got {type(value).__name__}.")
    low, high = (
        (SIGNED_PREF_MIN, SIGNED_PREF_MAX)
        if kind is PrefKind.SIGNED
        else (0, UNSIGNED_PREF_MAX)
    )
    if not low <= value <= high:
        raise ValueError(f"{kind.value} preference {value} is outside [{low}, {high}].")


def open_pref_store(
    config: PrefStoreConfig | None = None,
    resolver: BaseDirectoryResolver | None = None,
    payload_codec: Codec[Any] | None = None,
) -> KeyedStore[PrefMap]:
    """Build a store of preference maps.

    Args:
        config: Runtime configuration, read from env when omitted.
        resolver: Platform base directory resolver.
        payload_codec: Payload codec, JSON when omitted.

    Returns:
        Store whose records are PrefMap values.
    """
    return KeyedStore(PrefMapCodec(payload_codec), config=config, resolver=resolver)
