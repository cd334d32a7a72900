"""Prefstore exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each failure kind of the store raises a specific error type.
"""

from __future__ import annotations


class PrefStoreError(Exception):
    """Base exception for all prefstore failures."""


class PrefStoreConfigError(PrefStoreError):
    """Raised for invalid runtime configuration."""


class PrefStoreDependencyError(PrefStoreError):
    """Raised when an optional runtime dependency is missing."""


class InvalidKeyError(PrefStoreError):
    """Raised when a key is rejected or resolves outside the base directory."""


class DirectoryUnavailableError(PrefStoreError):
    """Raised when the platform base directory cannot be determined."""


class RecordNotFoundError(PrefStoreError):
    """Raised when loading a key that has no stored record."""


class StoreIOError(PrefStoreError):
    """Raised when an underlying filesystem operation fails."""


class EncodeError(PrefStoreError):
    """Raised when a codec cannot serialize a value."""


class DecodeError(PrefStoreError):
    """Raised when a codec cannot deserialize stored bytes."""
