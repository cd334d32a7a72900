"""Shared typed models.

This module defines immutable models shared by the path resolution
and store layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SanitizePolicy(str, Enum):
    """Strategy used to turn a key into path segments.

    ESCAPE rewrites every character outside the allowlist and never fails.
    REJECT keeps segments verbatim and refuses traversal or absolute keys.
    """

    ESCAPE = "escape"
    REJECT = "reject"


class FileLayout(str, Enum):
    """Placement of a record file relative to its key segments.

    FLAT nests all segments as directories holding one fixed file name.
    DIRECT uses the last segment plus an extension as the file name.
    """

    FLAT = "flat"
    DIRECT = "direct"


@dataclass(frozen=True)
class ResolvedPath:
    """Fully resolved on-disk location for one key.

    Attributes:
        base_dir: Platform base directory all records live under.
        segments: Sanitized key segments in key order.
        file_path: Final record file path.
    """

    base_dir: Path
    segments: tuple[str, ...]
    file_path: Path
