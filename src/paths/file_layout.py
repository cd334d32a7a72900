"""Record file placement under the base directory.

This module joins sanitized key segments onto the base directory
and verifies the result never leaves it.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.errors import InvalidKeyError
from core.types import FileLayout


def build_record_path(
    base_dir: Path,
    segments: tuple[str, ...],
    layout: FileLayout,
    file_name: str,
    file_extension: str,
) -> Path:
    """Compose the record file path for sanitized key segments.

    Args:
        base_dir: Platform base directory.
        segments: Sanitized key segments, at least one.
        layout: Record placement strategy.
        file_name: Fixed file name for the flat layout.
        file_extension: Suffix appended to the last segment for the direct layout.

    Returns:
        Record file path inside ``base_dir``.

    Raises:
        InvalidKeyError: If segments are empty or the path escapes ``base_dir``.
    """
    if not segments:
        raise InvalidKeyError("Cannot build a record path from an empty key.")
    if layout is FileLayout.FLAT:
        candidate = base_dir.joinpath(*segments, file_name)
    else:
        *parents, leaf = segments
        candidate = base_dir.joinpath(*parents, leaf + file_extension)
    ensure_within(base_dir, candidate)
    return candidate


def ensure_within(base_dir: Path, candidate: Path) -> None:
    """Require ``candidate`` to normalize to a location below ``base_dir``.

    Raises:
        InvalidKeyError: If the candidate resolves outside the base directory.
    """
    normalized_base = os.path.normpath(os.path.abspath(base_dir))
    normalized_candidate = os.path.normpath(os.path.abspath(candidate))
    try:
        common = os.path.commonpath([normalized_base, normalized_candidate])
    except ValueError as error:
        raise InvalidKeyError(
            f"Record path {candidate} is not on the same drive as base directory {base_dir}."
        ) from error
    if common != normalized_base or normalized_candidate == normalized_base:
        raise InvalidKeyError(
            f"Record path {candidate} resolves outside base directory {base_dir}. "
            "Use a relative key without parent-directory references."
        )
