"""Unit tests for key sanitization policies."""

from __future__ import annotations

import pytest

from core.errors import InvalidKeyError
from core.types import SanitizePolicy
from paths.sanitizer import PathSanitizer, escape_segment, sanitize_key


def test_escape_keeps_allowed_characters() -> None:
    """Letters, digits, space and hyphen should pass through unchanged."""
    assert sanitize_key("app/my key-1") == ("app", "my key-1")


def test_escape_neutralizes_parent_traversal() -> None:
    """Dots should be escaped so '..' never reaches the filesystem."""
    segments = sanitize_key("../../etc/passwd")

    assert segments == ("_46__46_", "_46__46_", "etc", "passwd")
    assert ".." not in segments


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("a//b", ("a", "_", "b")),
        ("/a/b", ("_", "a", "b")),
        ("a/", ("a", "_")),
        ("", ("_",)),
    ],
)
def test_escape_replaces_empty_segments_with_placeholder(key: str, expected: tuple[str, ...]) -> None:
    """Empty segments should become a deterministic placeholder."""
    assert sanitize_key(key) == expected


@pytest.mark.parametrize(
    ("segment", "expected"),
    [
        ("a.b", "a_46_b"),
        ("\x00", "_0_"),
        ("tab\there", "tab_9_here"),
        ("é", "_233_"),
        ("_", "_95_"),
        ("C:", "C_58_"),
        ("a\\b", "a_92_b"),
    ],
)
def test_escape_segment_encodes_code_points(segment: str, expected: str) -> None:
    """Characters outside the allowlist should become decimal code points."""
    assert escape_segment(segment) == expected


def test_escape_placeholder_cannot_collide_with_underscore_key() -> None:
    """A literal underscore segment must differ from the empty placeholder."""
    assert sanitize_key("_") != sanitize_key("")


def test_path_sanitizer_defaults_to_escape_policy() -> None:
    """Default sanitizer should never raise for traversal keys."""
    sanitizer = PathSanitizer()

    assert sanitizer.sanitize("/..") == ("_", "_46__46_")


@pytest.mark.parametrize(
    "key",
    [
        "../x",
        "a/../b",
        "a/..",
        "..",
        "foo../bar",
        "/abs/path",
        "C:\\prefs",
        "",
        "nul\x00byte",
        "bell\x07/name",
        "del\x7f",
    ],
)
def test_reject_policy_refuses_unsafe_keys(key: str) -> None:
    """Rejection policy should refuse traversal, absolute, control and empty keys."""
    sanitizer = PathSanitizer(SanitizePolicy.REJECT)

    with pytest.raises(InvalidKeyError):
        sanitizer.sanitize(key)


def test_reject_policy_keeps_segments_verbatim() -> None:
    """Rejection policy should split accepted keys without rewriting."""
    assert sanitize_key("app/options.v2", SanitizePolicy.REJECT) == ("app", "options.v2")
