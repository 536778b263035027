from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".avif", ".ico")
FONT_EXTENSIONS = (".woff", ".woff2", ".ttf", ".otf", ".eot")
VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov")
AUDIO_EXTENSIONS = (".mp3", ".wav", ".ogg", ".aac", ".m4a")


class ViteMode(str, Enum):
    DEVELOPMENT = "development"
    MANIFEST = "manifest"


class AssetKind(IntEnum):
    """Asset roles; the integer value is the emission order."""

    STYLESHEET = 0
    ENTRYPOINT = 1
    PRELOAD = 2


class PreloadKind(str, Enum):
    JAVASCRIPT = "javascript"
    CSS = "css"
    IMAGE = "image"
    FONT = "font"
    VIDEO = "video"
    AUDIO = "audio"
    UNKNOWN = "unknown"


def preload_kind(path: str) -> PreloadKind:
    lowered = path.lower()
    if lowered.endswith(".js"):
        return PreloadKind.JAVASCRIPT
    if lowered.endswith(".css"):
        return PreloadKind.CSS
    if lowered.endswith(IMAGE_EXTENSIONS):
        return PreloadKind.IMAGE
    if lowered.endswith(FONT_EXTENSIONS):
        return PreloadKind.FONT
    if lowered.endswith(VIDEO_EXTENSIONS):
        return PreloadKind.VIDEO
    if lowered.endswith(AUDIO_EXTENSIONS):
        return PreloadKind.AUDIO
    return PreloadKind.UNKNOWN


def resolve_path(file: str, prefix: str | None = None, app_url: str = "") -> str:
    """
    Build the public path of a built file.

    Args:
        file: Manifest `file` value, relative to the build output directory
        prefix: Normalized deployment prefix
        app_url: Normalized application base URL; empty yields a root-relative path

    Example:
        >>> resolve_path("assets/app-1a2b.js", "bundle", "https://cdn.example")
        'https://cdn.example/bundle/assets/app-1a2b.js'
    """
    if prefix:
        return f"{app_url}/{prefix}/{file}"
    return f"{app_url}/{file}"


@dataclass(frozen=True, eq=False)
class Asset:
    """A renderable unit identified by its resolved path.

    Two assets with the same path are the same asset whatever their kind,
    so a path first discovered as a stylesheet is never re-added as a preload.
    """

    kind: AssetKind
    path: str
    preload_kind: PreloadKind | None = field(default=None, compare=False)

    @classmethod
    def style_sheet(cls, path: str) -> Asset:
        return cls(AssetKind.STYLESHEET, path)

    @classmethod
    def entry_point(cls, path: str) -> Asset:
        return cls(AssetKind.ENTRYPOINT, path)

    @classmethod
    def pre_load(cls, path: str) -> Asset:
        return cls(AssetKind.PRELOAD, path, preload_kind(path))

    def sort_key(self) -> tuple[int, str]:
        return (int(self.kind), self.path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __lt__(self, other: Asset) -> bool:
        return self.sort_key() < other.sort_key()


class Chunk(BaseModel):
    """One manifest entry: a built output file and what it pulls in."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    file: str
    src: str | None = None
    name: str | None = None
    is_entry: bool = False
    is_dynamic_entry: bool = False
    is_implicit_entry: bool = False
    is_legacy_entry: bool = False
    integrity: str | None = None
    imports: list[str] = Field(default_factory=list)
    dynamic_imports: list[str] = Field(default_factory=list)
    css: list[str] = Field(default_factory=list)
    assets: list[str] = Field(default_factory=list)

    def iter_assets(self, prefix: str | None = None, app_url: str = "") -> Iterator[Asset]:
        """Yield the chunk's direct sub-assets: `assets` as preloads, then `css` as stylesheets."""
        for asset in self.assets:
            yield Asset.pre_load(resolve_path(asset, prefix, app_url))
        for css in self.css:
            yield Asset.style_sheet(resolve_path(css, prefix, app_url))
