"""Core constants used across prefstore modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_PREFS_FILE_NAME = "prefs.json"
DEFAULT_FILE_EXTENSION = ".json"
DEFAULT_LAYOUT = "flat"
DEFAULT_SANITIZE_POLICY = "escape"
EMPTY_SEGMENT_PLACEHOLDER = "_"
ESCAPE_MARKER = "_"
KEY_SEPARATOR = "/"
PARENT_DIR_TOKEN = ".."
TEMP_FILE_SUFFIX = ".tmp"
TEXT_ENCODING = "utf-8"
JSON_INDENT = 2
PREF_MAP_FORMAT_VERSION = 1
SIGNED_PREF_MIN = -(2**63)
SIGNED_PREF_MAX = 2**63 - 1
UNSIGNED_PREF_MAX = 2**64 - 1
WINDOWS_ROAMING_RELATIVE_DIR = ("AppData", "Roaming")
TRUE_ENV_VALUES = ("1", "true", "yes", "on")
FALSE_ENV_VALUES = ("0", "false", "no", "off", "")
