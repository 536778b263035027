"""
Build manifest loading.

Reads Vite's ``manifest.json`` once, keeps an MD5 digest of the exact bytes
for cache busting, and exposes the parsed chunk table read-only.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import TypeAdapter, ValidationError

from vite_bridge.domain.graph import generate_html_tags
from vite_bridge.domain.models import Chunk, resolve_path
from vite_bridge.infrastructure.exceptions import ManifestError
from vite_bridge.infrastructure.logging import get_logger, log_operation

logger = get_logger(__name__)

_CHUNK_TABLE = TypeAdapter(dict[str, Chunk])


def compute_hash(content: bytes) -> str:
    """Lowercase hex MD5 of the raw manifest bytes."""
    return hashlib.md5(content).hexdigest()


class Manifest:
    """Parsed manifest: chunk key to `Chunk`, plus the content hash."""

    __slots__ = ("_chunks", "_hash", "path")

    def __init__(self, chunks: Mapping[str, Chunk], content_hash: str, path: str | None = None):
        self._chunks = MappingProxyType(dict(chunks))
        self._hash = content_hash
        self.path = path

    @classmethod
    @log_operation("load_manifest")
    def load(cls, path: str | Path) -> Manifest:
        """
        Read and parse the manifest at `path`.

        Raises:
            ManifestError: If the file cannot be read, is not valid JSON, is not
                a JSON object, or has a chunk without a `file` field
        """
        path = str(path)
        try:
            content = Path(path).read_bytes()
        except OSError as e:
            raise ManifestError(f"Failed to open manifest at {path}: {e}", path) from e

        manifest = cls.from_bytes(content, path)
        logger.debug(f"Loaded {len(manifest)} chunks from {path} (hash {manifest.hash})")
        return manifest

    @classmethod
    def from_bytes(cls, content: bytes, path: str | None = None) -> Manifest:
        """Parse raw manifest bytes; the hash is taken before parsing."""
        content_hash = compute_hash(content)
        try:
            chunks = _CHUNK_TABLE.validate_json(content)
        except ValidationError as e:
            raise ManifestError(f"Failed to parse manifest json: {e}", path) from e
        return cls(chunks, content_hash, path)

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def chunks(self) -> Mapping[str, Chunk]:
        return self._chunks

    def get(self, key: str) -> Chunk | None:
        return self._chunks.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._chunks

    def __len__(self) -> int:
        return len(self._chunks)

    def entries(self) -> list[str]:
        """Keys of every chunk flagged `isEntry`, sorted."""
        return sorted(key for key, chunk in self._chunks.items() if chunk.is_entry)

    def generate_html_tags(
        self,
        entrypoints: Iterable[str],
        prefix: str | None = None,
        app_url: str = "",
    ) -> str:
        return generate_html_tags(self._chunks, entrypoints, prefix, app_url)

    def get_asset_url(self, asset: str, prefix: str | None = None, app_url: str = "") -> str:
        """Public path of the built file for source path `asset`, or '' if unknown."""
        chunk = self._chunks.get(asset)
        if chunk is None:
            return ""
        return resolve_path(chunk.file, prefix, app_url)

    def __repr__(self) -> str:
        return f"Manifest(path={self.path!r}, chunks={len(self._chunks)}, hash={self._hash!r})"
