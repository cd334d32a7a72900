"""Unit tests for record codecs."""

from __future__ import annotations

import pytest

from core.errors import DecodeError, EncodeError
from store.codec import JsonCodec, YamlCodec


def test_json_codec_roundtrips_nested_value() -> None:
    """JSON codec should decode exactly what it encoded."""
    codec = JsonCodec()
    value = {"color": "blue", "sizes": [1, 2.5], "enabled": True, "extra": None}

    assert codec.decode(codec.encode(value)) == value


def test_json_codec_writes_utf8_text() -> None:
    """Encoded records should be UTF-8 JSON text."""
    payload = JsonCodec().encode({"name": "café"})

    assert payload.decode("utf-8").strip().startswith("{")


@pytest.mark.parametrize("value", [{1, 2}, object(), float("nan")])
def test_json_codec_encode_failure_raises_encode_error(value: object) -> None:
    """Unserializable values should raise EncodeError."""
    with pytest.raises(EncodeError):
        JsonCodec().encode(value)


@pytest.mark.parametrize("payload", [b'{"color": "bl', b"\xff\xfe", b""])
def test_json_codec_decode_failure_raises_decode_error(payload: bytes) -> None:
    """Malformed or non-UTF-8 bytes should raise DecodeError."""
    with pytest.raises(DecodeError):
        JsonCodec().decode(payload)


def test_yaml_codec_roundtrips_nested_value() -> None:
    """YAML codec should decode exactly what it encoded."""
    pytest.importorskip("yaml")
    codec = YamlCodec()
    value = {"color": "blue", "sizes": [1, 2.5], "enabled": True}

    assert codec.decode(codec.encode(value)) == value


def test_yaml_codec_decode_failure_raises_decode_error() -> None:
    """Malformed YAML should raise DecodeError."""
    pytest.importorskip("yaml")

    with pytest.raises(DecodeError):
        YamlCodec().decode(b"color: [blue")


def test_yaml_codec_encode_failure_raises_encode_error() -> None:
    """Objects without a safe YAML representation should raise EncodeError."""
    pytest.importorskip("yaml")

    with pytest.raises(EncodeError):
        YamlCodec().encode({"handle": object()})
