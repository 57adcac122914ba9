"""Content root definitions and manifest kinds.

A content root definition maps a base path (the virtual prefix other code
uses to address static files) to the directory the files live in.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

BASE_PATH: Final[str] = "BasePath"
CONTENT_ROOT: Final[str] = "ContentRoot"

MANIFEST_VERSION: Final[str] = "1.0"


class ManifestKind(str, Enum):
    """Root element names of the supported manifest variants."""

    STATIC_ASSETS = "AspNetCoreStaticAssets"
    STATIC_WEB_ASSETS = "StaticWebAssets"

    @property
    def file_name(self) -> str:
        """Well-known file name the build writes this manifest to."""
        return MANIFEST_FILE_NAMES[self]

    @classmethod
    def parse(cls, value: str | ManifestKind) -> ManifestKind:
        """Resolve a kind from its root element name, case-insensitively."""
        if isinstance(value, ManifestKind):
            return value
        for kind in cls:
            if kind.value.lower() == value.strip().lower():
                return kind
        raise ValueError(f"Unknown manifest kind: {value}")


MANIFEST_FILE_NAMES: Final[dict[ManifestKind, str]] = {
    ManifestKind.STATIC_ASSETS: "Microsoft.AspNetCore.StaticAssets.xml",
    ManifestKind.STATIC_WEB_ASSETS: "Microsoft.AspNetCore.StaticWebAssets.xml",
}


@dataclass(frozen=True)
class ContentRootDefinition:
    """One content root as declared by the build.

    Empty strings stand for missing metadata, matching how the build engine
    reports unset metadata.
    """

    base_path: str
    content_root: str
    source_label: str = ""

    @property
    def base_path_key(self) -> str:
        """Case-insensitive lookup key for the base path."""
        return self.base_path.lower()

    @property
    def content_root_key(self) -> str:
        """Case-insensitive lookup key for the content root."""
        return self.content_root.lower()

    def get_metadata(self, name: str) -> str:
        """Return named metadata the way the build engine exposes it."""
        if name.lower() == BASE_PATH.lower():
            return self.base_path
        if name.lower() == CONTENT_ROOT.lower():
            return self.content_root
        return ""

    @classmethod
    def from_item(
        cls, item_spec: str, metadata: Mapping[str, str | None]
    ) -> ContentRootDefinition:
        """Build a definition from an item spec and its named metadata.

        Metadata names are matched case-insensitively.
        """
        lookup = {key.lower(): value for key, value in metadata.items()}
        return cls(
            base_path=lookup.get(BASE_PATH.lower()) or "",
            content_root=lookup.get(CONTENT_ROOT.lower()) or "",
            source_label=item_spec,
        )


class ContentRootItem(BaseModel):
    """Input item as received from the CLI definitions file or an MCP client."""

    model_config = ConfigDict(populate_by_name=True)

    item_spec: str = Field(default="", alias="ItemSpec")
    base_path: str | None = Field(default=None, alias=BASE_PATH)
    content_root: str | None = Field(default=None, alias=CONTENT_ROOT)

    def to_definition(self) -> ContentRootDefinition:
        return ContentRootDefinition(
            base_path=self.base_path or "",
            content_root=self.content_root or "",
            source_label=self.item_spec,
        )
