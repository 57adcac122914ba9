"""Read back a generated manifest."""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from .definitions import (
    BASE_PATH,
    CONTENT_ROOT,
    MANIFEST_VERSION,
    ContentRootDefinition,
    ManifestKind,
)
from .state import DiagnosticCode, ManifestDiagnostic, ManifestError

logger = logging.getLogger(__name__)


def _invalid(path: Path, reason: str) -> ManifestError:
    return ManifestError.from_diagnostic(
        ManifestDiagnostic(
            code=DiagnosticCode.INVALID_MANIFEST,
            message=f"Invalid manifest '{path}': {reason}",
            source_labels=[str(path)],
        )
    )


def read_manifest(path: str | Path) -> tuple[ManifestKind, list[ContentRootDefinition]]:
    """Parse a manifest file.

    Args:
        path: Manifest file written by write_manifest

    Returns:
        Manifest kind and its content roots in document order. Each entry's
        source label is the manifest path.

    Raises:
        ManifestError: If the file is missing, unreadable or not a manifest
    """
    manifest_path = Path(path)
    try:
        data = manifest_path.read_bytes()
    except OSError as e:
        raise ManifestError.from_diagnostic(
            ManifestDiagnostic(
                code=DiagnosticCode.IO_FAILURE,
                message=f"Failed to read manifest '{manifest_path}': {e}",
            )
        ) from e

    try:
        root = etree.fromstring(data)
    except etree.XMLSyntaxError as e:
        raise _invalid(manifest_path, str(e)) from e

    try:
        kind = ManifestKind.parse(root.tag)
    except ValueError as e:
        raise _invalid(manifest_path, f"unexpected root element '{root.tag}'") from e

    version = root.get("Version")
    if version != MANIFEST_VERSION:
        raise _invalid(manifest_path, f"unsupported version '{version}'")

    definitions: list[ContentRootDefinition] = []
    for node in root:
        if not isinstance(node.tag, str):
            continue  # comments, processing instructions
        if node.tag != CONTENT_ROOT:
            raise _invalid(manifest_path, f"unexpected element '{node.tag}'")
        definitions.append(
            ContentRootDefinition(
                base_path=node.get(BASE_PATH, ""),
                content_root=node.get("Path", ""),
                source_label=str(manifest_path),
            )
        )

    logger.debug(f"Read {len(definitions)} content roots from {manifest_path}")
    return kind, definitions
