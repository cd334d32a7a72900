"""Key sanitization into safe relative path segments.

Keys are ``/``-delimited hierarchical strings supplied by callers. Two
policies map a key to path segments:

* ESCAPE copies ASCII letters, digits, space and hyphen verbatim and
  rewrites every other character as ``_<codepoint>_``. Because ``.`` is
  rewritten, ``..`` can never survive as a parent reference, and the
  policy has no failure case tied to key content.
* REJECT keeps segments verbatim and refuses empty, absolute, control-character
  and parent-traversing keys. It is retained for stores written by older
  releases.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath, PureWindowsPath

from core.constants import (
    EMPTY_SEGMENT_PLACEHOLDER,
    ESCAPE_MARKER,
    KEY_SEPARATOR,
    PARENT_DIR_TOKEN,
)
from core.errors import InvalidKeyError
from core.logging_config import get_logger
from core.types import SanitizePolicy

_LOGGER = get_logger(__name__)
_ALLOWED_PUNCTUATION = frozenset(" -")


@dataclass(frozen=True)
class PathSanitizer:
    """Key sanitizer bound to one policy."""

    policy: SanitizePolicy = SanitizePolicy.ESCAPE

    def sanitize(self, key: str) -> tuple[str, ...]:
        """Convert a key into relative path segments.

        Args:
            key: Caller-supplied hierarchical key.

        Returns:
            Ordered path segments, never empty.

        Raises:
            InvalidKeyError: Under the REJECT policy for unsafe keys.
        """
        return sanitize_key(key, self.policy)


def sanitize_key(key: str, policy: SanitizePolicy = SanitizePolicy.ESCAPE) -> tuple[str, ...]:
    """Convert a key into relative path segments using ``policy``."""
    if policy is SanitizePolicy.REJECT:
        return reject_unsafe_key(key)
    return escape_key(key)


def escape_key(key: str) -> tuple[str, ...]:
    """Escape every ``/``-delimited segment of ``key`` independently.

    Example:
        ``escape_key("../etc")`` returns ``("_46__46_", "etc")``.
    """
    return tuple(escape_segment(segment) for segment in key.split(KEY_SEPARATOR))


def escape_segment(segment: str) -> str:
    """Escape one key segment, substituting a placeholder when empty."""
    if not segment:
        return EMPTY_SEGMENT_PLACEHOLDER
    return "".join(_escape_char(char) for char in segment)


def _escape_char(char: str) -> str:
    if (char.isascii() and char.isalnum()) or char in _ALLOWED_PUNCTUATION:
        return char
    return f"{ESCAPE_MARKER}{ord(char)}{ESCAPE_MARKER}"


def reject_unsafe_key(key: str) -> tuple[str, ...]:
    """Split ``key`` verbatim, refusing keys that could leave the base directory.

    Raises:
        InvalidKeyError: If key is empty, absolute, holds a control character,
            or contains a parent-directory reference such as ``../``.
    """
    if not key:
        _raise_invalid_key(key, "key is empty")
    if _is_absolute(key):
        _raise_invalid_key(key, "key is an absolute path")
    if any(_is_control_char(char) for char in key):
        _raise_invalid_key(key, "key contains a control character")
    segments = tuple(key.split(KEY_SEPARATOR))
    if _has_parent_reference(key) or PARENT_DIR_TOKEN in segments:
        _raise_invalid_key(key, "key contains a parent-directory reference")
    return segments


def _has_parent_reference(key: str) -> bool:
    parent_prefix = PARENT_DIR_TOKEN + KEY_SEPARATOR
    return (
        key == PARENT_DIR_TOKEN
        or parent_prefix in key
        or key.endswith(KEY_SEPARATOR + PARENT_DIR_TOKEN)
    )


def _is_control_char(char: str) -> bool:
    return ord(char) < 0x20 or ord(char) == 0x7F


def _is_absolute(key: str) -> bool:
    windows_path = PureWindowsPath(key)
    return (
        PurePosixPath(key).is_absolute()
        or windows_path.is_absolute()
        or bool(windows_path.drive)
        or bool(windows_path.root)
    )


def _raise_invalid_key(key: str, reason: str) -> None:
    """Log and raise a key rejection.

    Raises:
        InvalidKeyError: Always.
    """
    _LOGGER.warning("key_rejected", key=key, reason=reason)
    raise InvalidKeyError(
        f"Invalid preferences key '{key}': {reason}. "
        "Use a relative '/'-delimited key such as 'app/module/name'."
    )
