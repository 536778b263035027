from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from vite_bridge.infrastructure.exceptions import ManifestError
from vite_bridge.infrastructure.manifest import Manifest


def test_load_parses_chunks(manifest_path: Path):
    manifest = Manifest.load(manifest_path)

    foo = manifest.get("views/foo.js")
    assert foo is not None
    assert foo.file == "assets/foo-BRBmoGS9.js"
    assert foo.is_entry is True
    assert foo.imports == ["_shared-B7PI925R.js"]
    assert foo.css == ["assets/foo-5UjPuW-k.css"]
    assert foo.dynamic_imports == []
    assert foo.assets == []

    bar = manifest.get("views/bar.js")
    assert bar.dynamic_imports == ["baz.js"]
    assert manifest.get("baz.js").is_dynamic_entry is True


def test_hash_is_md5_of_raw_bytes(manifest_path: Path):
    manifest = Manifest.load(manifest_path)

    assert manifest.hash == hashlib.md5(manifest_path.read_bytes()).hexdigest()
    assert len(manifest.hash) == 32


def test_hash_is_stable_and_content_sensitive(tmp_path: Path, manifest_path: Path):
    content = manifest_path.read_bytes()
    copy = tmp_path / "manifest.json"
    copy.write_bytes(content)

    assert Manifest.load(copy).hash == Manifest.load(manifest_path).hash

    copy.write_bytes(content.replace(b"foo-BRBmoGS9", b"foo-BRBmoGS8"))
    assert Manifest.load(copy).hash != Manifest.load(manifest_path).hash


def test_entries_lists_is_entry_chunks(manifest_path: Path):
    assert Manifest.load(manifest_path).entries() == ["views/bar.js", "views/foo.js"]


def test_unknown_fields_are_ignored(write_manifest):
    path = write_manifest({"main.js": {"file": "assets/main.js", "isEntry": True, "futureField": [1, 2]}})

    chunk = Manifest.load(path).get("main.js")
    assert chunk.file == "assets/main.js"
    assert chunk.integrity is None


def test_missing_file_raises_manifest_error(tmp_path: Path):
    missing = tmp_path / "nope.json"

    with pytest.raises(ManifestError) as exc_info:
        Manifest.load(missing)

    assert "Failed to open manifest" in exc_info.value.cause
    assert exc_info.value.manifest_path == str(missing)


def test_invalid_json_raises_manifest_error(tmp_path: Path):
    path = tmp_path / "manifest.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ManifestError, match="Failed to parse manifest json"):
        Manifest.load(path)


def test_chunk_without_file_raises_manifest_error(write_manifest):
    path = write_manifest({"main.js": {"isEntry": True}})

    with pytest.raises(ManifestError):
        Manifest.load(path)


def test_non_object_manifest_raises_manifest_error(tmp_path: Path):
    path = tmp_path / "manifest.json"
    path.write_text('["assets/main.js"]', encoding="utf-8")

    with pytest.raises(ManifestError):
        Manifest.load(path)


def test_get_asset_url(manifest_path: Path):
    manifest = Manifest.load(manifest_path)

    assert manifest.get_asset_url("baz.js") == "/assets/baz-B2H3sXNv.js"
    assert manifest.get_asset_url("baz.js", "bundle") == "/bundle/assets/baz-B2H3sXNv.js"
    assert manifest.get_asset_url("unknown.js") == ""


def test_manifest_is_read_only(manifest_path: Path):
    manifest = Manifest.load(manifest_path)

    with pytest.raises(TypeError):
        manifest.chunks["new.js"] = manifest.get("baz.js")  # type: ignore[index]
