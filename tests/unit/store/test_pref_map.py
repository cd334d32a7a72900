"""Unit tests for the typed preference map."""

from __future__ import annotations

import json

import pytest

from core.config import PrefStoreConfig
from core.errors import DecodeError, EncodeError
from store.pref_map import Pref, PrefKind, PrefMap, PrefMapCodec, open_pref_store


def _sample_map() -> PrefMap:
    pref_map = PrefMap()
    pref_map.set("theme", Pref.of_string("dark"))
    pref_map.set("zoom", Pref.of_float(1.25))
    pref_map.set("offset", Pref.of_signed(-42))
    pref_map.set("launches", Pref.of_unsigned(2**64 - 1))
    return pref_map


@pytest.mark.parametrize(
    ("kind", "value"),
    [
        (PrefKind.STRING, 1),
        (PrefKind.FLOAT, float("nan")),
        (PrefKind.FLOAT, 1),
        (PrefKind.SIGNED, 2**63),
        (PrefKind.SIGNED, True),
        (PrefKind.UNSIGNED, -1),
        (PrefKind.UNSIGNED, 2**64),
    ],
)
def test_pref_rejects_mismatched_values(kind: PrefKind, value: object) -> None:
    """Pref construction should validate type and integer range."""
    with pytest.raises(ValueError):
        Pref(kind, value)  # type: ignore[arg-type]


def test_of_float_widens_integral_values() -> None:
    """Float constructor should store integral input as a float."""
    pref = Pref.of_float(2)

    assert pref.kind is PrefKind.FLOAT and isinstance(pref.value, float)


def test_pref_map_mapping_helpers() -> None:
    """Map helpers should expose names in sorted order."""
    pref_map = _sample_map()

    removed = pref_map.remove("offset")

    assert removed == Pref.of_signed(-42)
    assert list(pref_map) == ["launches", "theme", "zoom"]
    assert "theme" in pref_map and len(pref_map) == 3
    assert pref_map.get("missing") is None


def test_pref_map_roundtrips_through_store(tmp_path) -> None:
    """Store should persist every preference kind without loss."""
    store = open_pref_store(PrefStoreConfig(base_dir=tmp_path))
    pref_map = _sample_map()

    pref_map.save("editor/settings", store)
    loaded = PrefMap.load("editor/settings", store)

    assert loaded == pref_map


def test_pref_map_payload_carries_version_tag(tmp_path) -> None:
    """Stored payload should include the format version."""
    store = open_pref_store(PrefStoreConfig(base_dir=tmp_path))
    _sample_map().save("editor/settings", store)

    payload = json.loads(store.build_file_path("editor/settings").read_text(encoding="utf-8"))

    assert payload["version"] == 1
    assert payload["map"]["theme"] == {"kind": "string", "value": "dark"}


def test_pref_map_uses_env_store_when_omitted(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Save and load without a store should use the env-configured base dir."""
    monkeypatch.setenv("PREFSTORE_BASE_DIR", str(tmp_path))

    _sample_map().save("app")

    assert PrefMap.load("app") == _sample_map()
    assert (tmp_path / "app" / "prefs.json").is_file()


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"version": 2, "map": {}},
        {"version": True, "map": {}},
        {"version": "1", "map": {}},
        {"version": 1},
        {"version": 1, "map": {"a": "dark"}},
        {"version": 1, "map": {"a": {"kind": "bool", "value": True}}},
        {"version": 1, "map": {"a": {"kind": "unsigned", "value": -5}}},
    ],
)
def test_pref_map_codec_rejects_invalid_payloads(payload: object) -> None:
    """Malformed payloads should raise DecodeError instead of defaults."""
    with pytest.raises(DecodeError):
        PrefMapCodec().decode(json.dumps(payload).encode("utf-8"))


def test_pref_map_codec_accepts_integral_float_payload() -> None:
    """Integer JSON numbers should decode as float prefs."""
    payload = {"version": 1, "map": {"zoom": {"kind": "float", "value": 2}}}

    pref_map = PrefMapCodec().decode(json.dumps(payload).encode("utf-8"))

    assert pref_map.get("zoom") == Pref.of_float(2.0)


def test_pref_map_codec_rejects_non_map_values() -> None:
    """Encoding anything but a PrefMap should raise EncodeError."""
    with pytest.raises(EncodeError):
        PrefMapCodec().encode({"theme": "dark"})  # type: ignore[arg-type]


def test_pref_map_roundtrips_through_yaml_payload(tmp_path) -> None:
    """A YAML payload codec should store the same map."""
    pytest.importorskip("yaml")
    from store.codec import YamlCodec

    store = open_pref_store(PrefStoreConfig(base_dir=tmp_path), payload_codec=YamlCodec())
    _sample_map().save("editor", store)

    assert PrefMap.load("editor", store) == _sample_map()
