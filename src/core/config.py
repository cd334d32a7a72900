"""Runtime configuration model for prefstore.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path, PurePosixPath, PureWindowsPath

from core.constants import (
    DEFAULT_FILE_EXTENSION,
    DEFAULT_LAYOUT,
    DEFAULT_PREFS_FILE_NAME,
    DEFAULT_SANITIZE_POLICY,
    FALSE_ENV_VALUES,
    TRUE_ENV_VALUES,
)
from core.errors import PrefStoreConfigError
from core.types import FileLayout, SanitizePolicy


@dataclass(frozen=True)
class PrefStoreConfig:
    """Validated runtime configuration.

    Attributes:
        base_dir: Optional override for the platform base directory.
        file_name: Record file name used by the flat layout.
        file_extension: Record file extension used by the direct layout.
        layout: Placement of record files under key segments.
        sanitize_policy: Key sanitization strategy.
        atomic_writes: Whether saves write a temp file and rename it.
    """

    base_dir: Path | None = None
    file_name: str = DEFAULT_PREFS_FILE_NAME
    file_extension: str = DEFAULT_FILE_EXTENSION
    layout: FileLayout = FileLayout(DEFAULT_LAYOUT)
    sanitize_policy: SanitizePolicy = SanitizePolicy(DEFAULT_SANITIZE_POLICY)
    atomic_writes: bool = False

    def __post_init__(self) -> None:
        _validate_file_name(self.file_name)
        _validate_file_extension(self.file_extension)

    @classmethod
    def from_env(cls) -> "PrefStoreConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PrefStoreConfigError: If environment values are invalid.
        """
        base_dir_value = os.getenv("PREFSTORE_BASE_DIR")
        return cls(
            base_dir=Path(base_dir_value).expanduser().resolve() if base_dir_value else None,
            file_name=os.getenv("PREFSTORE_FILE_NAME", DEFAULT_PREFS_FILE_NAME),
            file_extension=os.getenv("PREFSTORE_FILE_EXTENSION", DEFAULT_FILE_EXTENSION),
            layout=_parse_layout(os.getenv("PREFSTORE_LAYOUT", DEFAULT_LAYOUT)),
            sanitize_policy=_parse_sanitize_policy(
                os.getenv("PREFSTORE_SANITIZE_POLICY", DEFAULT_SANITIZE_POLICY)
            ),
            atomic_writes=_parse_bool(
                "PREFSTORE_ATOMIC_WRITES", os.getenv("PREFSTORE_ATOMIC_WRITES", "0")
            ),
        )


def _parse_layout(raw_value: str) -> FileLayout:
    """Parse the record layout environment value.

    Raises:
        PrefStoreConfigError: If value names no known layout.
    """
    try:
        return FileLayout(raw_value.strip().lower())
    except ValueError as error:
        supported = ", ".join(layout.value for layout in FileLayout)
        raise PrefStoreConfigError(
            f"Invalid PREFSTORE_LAYOUT value: expected one of {supported}, got '{raw_value}'."
        ) from error


def _parse_sanitize_policy(raw_value: str) -> SanitizePolicy:
    """Parse the key sanitization policy environment value.

    Raises:
        PrefStoreConfigError: If value names no known policy.
    """
    try:
        return SanitizePolicy(raw_value.strip().lower())
    except ValueError as error:
        supported = ", ".join(policy.value for policy in SanitizePolicy)
        raise PrefStoreConfigError(
            "Invalid PREFSTORE_SANITIZE_POLICY value: "
            f"expected one of {supported}, got '{raw_value}'."
        ) from error


def _parse_bool(variable_name: str, raw_value: str) -> bool:
    normalized = raw_value.strip().lower()
    if normalized in TRUE_ENV_VALUES:
        return True
    if normalized in FALSE_ENV_VALUES:
        return False
    raise PrefStoreConfigError(
        f"Invalid {variable_name} value: expected a boolean flag, got '{raw_value}'. "
        "Use 1/0, true/false, yes/no or on/off."
    )


def _validate_file_name(file_name: str) -> None:
    """Require a single, non-traversing path component."""
    posix_parts = PurePosixPath(file_name).parts
    windows_parts = PureWindowsPath(file_name).parts
    if (
        not file_name
        or file_name in (".", "..")
        or len(posix_parts) != 1
        or len(windows_parts) != 1
    ):
        raise PrefStoreConfigError(
            f"Invalid record file name '{file_name}': expected a single file name "
            "without directory separators."
        )


def _validate_file_extension(file_extension: str) -> None:
    if file_extension and (
        not file_extension.startswith(".")
        or "/" in file_extension
        or "\\" in file_extension
        or file_extension in (".", "..")
    ):
        raise PrefStoreConfigError(
            f"Invalid record file extension '{file_extension}': "
            "expected an empty string or a suffix such as '.json'."
        )
