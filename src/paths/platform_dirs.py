"""Per-user base directory resolution.

The platform is detected once and mapped to a resolution strategy.
Directory conventions come from platformdirs; the lookup and the
environment are injectable so every strategy is testable on any OS.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
import os
from pathlib import Path
import sys

from platformdirs.macos import MacOS
from platformdirs.unix import Unix

from core.constants import WINDOWS_ROAMING_RELATIVE_DIR
from core.errors import DirectoryUnavailableError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class PlatformKind(str, Enum):
    """Operating system families with distinct directory conventions."""

    MACOS = "macos"
    UNIX = "unix"
    WINDOWS = "windows"


def detect_platform(sys_platform: str | None = None) -> PlatformKind:
    """Map a ``sys.platform`` value to a platform kind.

    Args:
        sys_platform: Platform identifier, defaults to the running host.

    Returns:
        Detected platform kind.
    """
    value = sys.platform if sys_platform is None else sys_platform
    if value == "darwin":
        return PlatformKind.MACOS
    if value in ("win32", "cygwin"):
        return PlatformKind.WINDOWS
    return PlatformKind.UNIX


def platform_data_dir(platform: PlatformKind) -> str | None:
    """Return the platformdirs per-user data directory for ``platform``.

    macOS yields ``~/Library/Application Support``, Unix yields
    ``$XDG_DATA_HOME`` or ``~/.local/share``, and Windows yields the
    roaming app-data known folder. Windows is only queried on a Windows
    host.

    Args:
        platform: Platform strategy to query.

    Returns:
        Directory path, or None when the platform cannot supply one.
    """
    if platform is PlatformKind.MACOS:
        data_dir = MacOS().user_data_dir
    elif platform is PlatformKind.UNIX:
        data_dir = Unix().user_data_dir
    else:
        data_dir = _windows_roaming_data_dir()
    if not data_dir or data_dir.startswith("~"):
        return None
    return data_dir


def _windows_roaming_data_dir() -> str | None:
    if sys.platform != "win32":
        return None
    from platformdirs.windows import Windows

    try:
        return Windows(roaming=True).user_data_dir
    except (OSError, ValueError):
        return None


@dataclass(frozen=True)
class BaseDirectoryResolver:
    """Resolve the writable per-user root for stored records.

    Attributes:
        platform: Platform strategy to apply.
        environ: Environment mapping consulted for the Windows profile fallback.
        data_dir_lookup: Per-platform data directory lookup, None when the
            platform cannot supply one.
    """

    platform: PlatformKind = field(default_factory=detect_platform)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    data_dir_lookup: Callable[[PlatformKind], str | None] = field(
        default_factory=lambda: platform_data_dir
    )

    def resolve(self) -> Path:
        """Return the base directory for the configured platform.

        Returns:
            Platform base directory path.

        Raises:
            DirectoryUnavailableError: If no home or profile directory is known.
        """
        strategies: dict[PlatformKind, Callable[[], Path | None]] = {
            PlatformKind.MACOS: self._resolve_from_lookup,
            PlatformKind.UNIX: self._resolve_from_lookup,
            PlatformKind.WINDOWS: self._resolve_windows,
        }
        base_dir = strategies[self.platform]()
        if base_dir is None:
            raise DirectoryUnavailableError(
                f"Could not find user home directory for preferences on {self.platform.value}. "
                "Set HOME (or PREFSTORE_BASE_DIR) and retry."
            )
        _LOGGER.debug(
            "base_directory_resolved", platform=self.platform.value, base_dir=str(base_dir)
        )
        return base_dir

    def _resolve_from_lookup(self) -> Path | None:
        data_dir = self.data_dir_lookup(self.platform)
        return Path(data_dir) if data_dir else None

    def _resolve_windows(self) -> Path | None:
        known_folder = self._resolve_from_lookup()
        if known_folder is not None:
            return known_folder
        home_drive = self.environ.get("HOMEDRIVE")
        home_path = self.environ.get("HOMEPATH")
        if home_drive and home_path:
            return Path(home_drive + home_path).joinpath(*WINDOWS_ROAMING_RELATIVE_DIR)
        return None
