"""Keyed record store on the local filesystem.

This module maps caller keys to record files under the per-user base
directory and delegates value serialization to a codec.
"""

from __future__ import annotations

import os
from pathlib import Path
import tempfile
from typing import Any, BinaryIO, Generic, TypeVar

from core.config import PrefStoreConfig
from core.constants import TEMP_FILE_SUFFIX
from core.errors import InvalidKeyError, RecordNotFoundError, StoreIOError
from core.logging_config import get_logger
from core.types import ResolvedPath
from paths.file_layout import build_record_path
from paths.platform_dirs import BaseDirectoryResolver
from paths.sanitizer import PathSanitizer
from store.codec import Codec, JsonCodec

_LOGGER = get_logger(__name__)

T = TypeVar("T")


class KeyedStore(Generic[T]):
    """Filesystem store of one codec-encoded record per key.

    Every call opens and closes its own file handle; nothing is cached
    between calls. Saves overwrite prior content unconditionally.
    """

    def __init__(
        self,
        codec: Codec[T],
        config: PrefStoreConfig | None = None,
        resolver: BaseDirectoryResolver | None = None,
    ) -> None:
        """Initialize store.

        Args:
            codec: Value codec used for record bytes.
            config: Runtime configuration, read from env when omitted.
            resolver: Platform base directory resolver.
        """
        self._codec = codec
        self._config = config or PrefStoreConfig.from_env()
        self._resolver = resolver or BaseDirectoryResolver()
        self._sanitizer = PathSanitizer(self._config.sanitize_policy)

    def resolve_base_directory(self) -> Path:
        """Return the configured or platform base directory.

        Raises:
            DirectoryUnavailableError: If the platform has no home directory.
        """
        if self._config.base_dir is not None:
            return self._config.base_dir
        return self._resolver.resolve()

    def resolve_record(self, key: str) -> ResolvedPath:
        """Resolve a key into its base directory, segments and file path.

        Raises:
            InvalidKeyError: If the key is rejected or escapes the base directory.
            DirectoryUnavailableError: If the base directory is unknown.
        """
        base_dir = self.resolve_base_directory()
        segments = self._sanitizer.sanitize(key)
        file_path = build_record_path(
            base_dir,
            segments,
            self._config.layout,
            self._config.file_name,
            self._config.file_extension,
        )
        return ResolvedPath(base_dir=base_dir, segments=segments, file_path=file_path)

    def build_file_path(self, key: str) -> Path:
        """Return the record file path for ``key``."""
        return self.resolve_record(key).file_path

    def save(self, key: str, value: T) -> None:
        """Encode ``value`` and overwrite the record stored under ``key``.

        Missing parent directories are created. The value is encoded
        before the file is opened, so encode failures leave any existing
        record untouched.

        Raises:
            InvalidKeyError: If the key is rejected.
            DirectoryUnavailableError: If the base directory is unknown.
            EncodeError: If the codec cannot serialize the value.
            StoreIOError: If directory creation or writing fails.
        """
        file_path = self.build_file_path(key)
        payload = self._codec.encode(value)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            if self._config.atomic_writes:
                _write_atomic(file_path, payload)
            else:
                with file_path.open("wb") as sink:
                    sink.write(payload)
                    sink.flush()
        except ValueError as error:
            raise _unusable_path_error(key, file_path, error) from error
        except OSError as error:
            raise StoreIOError(
                f"Failed to write record for key '{key}' at {file_path}: {error}. "
                "Check directory permissions and free disk space."
            ) from error
        _LOGGER.info("record_saved", key=key, path=str(file_path), size_bytes=len(payload))

    def load(self, key: str) -> T:
        """Read and decode the record stored under ``key``.

        Raises:
            InvalidKeyError: If the key is rejected.
            DirectoryUnavailableError: If the base directory is unknown.
            RecordNotFoundError: If no record exists for the key.
            DecodeError: If the stored bytes cannot be decoded.
            StoreIOError: If reading fails.
        """
        file_path = self.build_file_path(key)
        try:
            with file_path.open("rb") as source:
                payload = source.read()
        except ValueError as error:
            raise _unusable_path_error(key, file_path, error) from error
        except FileNotFoundError as error:
            _LOGGER.info("record_missing", key=key, path=str(file_path))
            raise RecordNotFoundError(
                f"No record stored for key '{key}' at {file_path}. Save the key before loading it."
            ) from error
        except OSError as error:
            raise StoreIOError(
                f"Failed to read record for key '{key}' at {file_path}: {error}."
            ) from error
        value = self._codec.decode(payload)
        _LOGGER.info("record_loaded", key=key, path=str(file_path), size_bytes=len(payload))
        return value

    def save_to(self, value: T, sink: BinaryIO) -> None:
        """Encode ``value`` into a caller-owned binary sink.

        Raises:
            EncodeError: If the codec cannot serialize the value.
            StoreIOError: If writing to the sink fails.
        """
        payload = self._codec.encode(value)
        try:
            sink.write(payload)
            sink.flush()
        except OSError as error:
            raise StoreIOError(f"Failed to write record to sink: {error}.") from error

    def load_from(self, source: BinaryIO) -> T:
        """Decode a value from a caller-owned binary source.

        Raises:
            DecodeError: If the bytes cannot be decoded.
            StoreIOError: If reading from the source fails.
        """
        try:
            payload = source.read()
        except OSError as error:
            raise StoreIOError(f"Failed to read record from source: {error}.") from error
        return self._codec.decode(payload)


def _write_atomic(file_path: Path, payload: bytes) -> None:
    """Write payload to a unique sibling temp file and rename it over the record."""
    with tempfile.NamedTemporaryFile(
        dir=file_path.parent,
        prefix=f".{file_path.name}.",
        suffix=TEMP_FILE_SUFFIX,
        delete=False,
    ) as sink:
        temp_path = Path(sink.name)
        try:
            sink.write(payload)
            sink.flush()
            os.fsync(sink.fileno())
        except OSError:
            sink.close()
            temp_path.unlink(missing_ok=True)
            raise
    try:
        os.replace(temp_path, file_path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


def _unusable_path_error(key: str, file_path: Path, error: ValueError) -> InvalidKeyError:
    """Build the error for a record path the operating system refuses outright."""
    return InvalidKeyError(
        f"Invalid preferences key '{key}': record path {file_path} is unusable ({error})."
    )


def open_json_store(
    config: PrefStoreConfig | None = None,
    resolver: BaseDirectoryResolver | None = None,
) -> KeyedStore[Any]:
    """Build a store of plain JSON-compatible values."""
    return KeyedStore(JsonCodec(), config=config, resolver=resolver)
