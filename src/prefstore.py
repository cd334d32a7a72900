"""Public SDK surface for prefstore.

This module provides a stable import path for library users.
It re-exports the store, codecs, typed models and errors.
"""

from __future__ import annotations

from core.config import PrefStoreConfig
from core.errors import (
    DecodeError,
    DirectoryUnavailableError,
    EncodeError,
    InvalidKeyError,
    PrefStoreConfigError,
    PrefStoreDependencyError,
    PrefStoreError,
    RecordNotFoundError,
    StoreIOError,
)
from core.types import FileLayout, ResolvedPath, SanitizePolicy
from paths.platform_dirs import BaseDirectoryResolver, PlatformKind, detect_platform
from paths.sanitizer import PathSanitizer, sanitize_key
from store.codec import Codec, JsonCodec, YamlCodec
from store.keyed_store import KeyedStore, open_json_store
from store.pref_map import Pref, PrefKind, PrefMap, PrefMapCodec, open_pref_store

__all__ = [
    "BaseDirectoryResolver",
    "Codec",
    "DecodeError",
    "DirectoryUnavailableError",
    "EncodeError",
    "FileLayout",
    "InvalidKeyError",
    "JsonCodec",
    "KeyedStore",
    "PathSanitizer",
    "PlatformKind",
    "Pref",
    "PrefKind",
    "PrefMap",
    "PrefMapCodec",
    "PrefStoreConfig",
    "PrefStoreConfigError",
    "PrefStoreDependencyError",
    "PrefStoreError",
    "RecordNotFoundError",
    "ResolvedPath",
    "SanitizePolicy",
    "StoreIOError",
    "YamlCodec",
    "detect_platform",
    "open_json_store",
    "open_pref_store",
    "sanitize_key",
]
