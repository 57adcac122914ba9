"""Manifest rendering and serialization.

Output matches what the build's XML writer produces, byte for byte:
no declaration, two-space indentation, `\\n` newlines, no trailing newline,
and empty elements written as `<Name a="b" />`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Final

from lxml import etree

from .definitions import (
    BASE_PATH,
    CONTENT_ROOT,
    MANIFEST_VERSION,
    ContentRootDefinition,
    ManifestKind,
)
from .state import (
    DiagnosticCode,
    ManifestDiagnostic,
    ManifestValidationError,
    ManifestWriteError,
)

logger = logging.getLogger(__name__)

INDENT: Final[str] = "  "
NEWLINE: Final[str] = "\n"
ENCODING: Final[str] = "utf-8"

# lxml writes decimal references for whitespace in attributes, the build hex ones
CHARACTER_REFERENCES: Final[dict[str, str]] = {
    "&#9;": "&#x9;",
    "&#10;": "&#xA;",
    "&#13;": "&#xD;",
}


def render_manifest(
    definitions: Iterable[ContentRootDefinition],
    kind: ManifestKind = ManifestKind.STATIC_ASSETS,
) -> etree._Element:
    """Build the manifest element tree, one ContentRoot node per definition.

    Raises:
        ManifestValidationError: If a value cannot be written as UTF-8 XML
    """
    root = etree.Element(kind.value)
    root.set("Version", MANIFEST_VERSION)
    for definition in definitions:
        node = etree.SubElement(root, CONTENT_ROOT)
        _set_attribute(node, BASE_PATH, definition.base_path, definition)
        _set_attribute(node, "Path", definition.content_root, definition)
    return root


def _set_attribute(
    node: etree._Element, name: str, value: str, definition: ContentRootDefinition
) -> None:
    try:
        value.encode(ENCODING)
        node.set(name, value)
    except ValueError as e:
        # control characters, lone surrogates
        raise ManifestValidationError.from_diagnostic(
            ManifestDiagnostic(
                code=DiagnosticCode.INVALID_VALUE,
                message=(
                    f"Invalid value for metadata '{_metadata_name(name)}' "
                    f"for '{definition.source_label}': {e}"
                ),
                source_labels=[definition.source_label],
            )
        ) from e


def _metadata_name(attribute: str) -> str:
    return CONTENT_ROOT if attribute == "Path" else attribute


def _shell_markup(element: etree._Element) -> str:
    """Serialize the element's tag and attributes as an empty element."""
    shell = etree.Element(element.tag)
    for name, value in element.items():
        shell.set(name, value)
    markup = etree.tostring(shell, encoding="unicode")
    for decimal, hexadecimal in CHARACTER_REFERENCES.items():
        markup = markup.replace(decimal, hexadecimal)
    return markup


def _empty_element(element: etree._Element) -> str:
    # lxml writes `<a/>`; the build writes `<a />`
    return _shell_markup(element)[:-2] + " />"


def _start_tag(element: etree._Element) -> str:
    return _shell_markup(element)[:-2] + ">"


def _format(element: etree._Element, depth: int, lines: list[str]) -> None:
    prefix = INDENT * depth
    if len(element) == 0:
        lines.append(prefix + _empty_element(element))
        return
    lines.append(prefix + _start_tag(element))
    for child in element:
        _format(child, depth + 1, lines)
    lines.append(f"{prefix}</{element.tag}>")


def serialize_manifest(root: etree._Element) -> bytes:
    """Serialize a rendered manifest to UTF-8 bytes."""
    lines: list[str] = []
    _format(root, 0, lines)
    return NEWLINE.join(lines).encode(ENCODING)


def write_manifest(path: str | Path, data: bytes) -> None:
    """Write manifest bytes, replacing any existing file.

    Parent directories are not created; the build owns the output layout.

    Raises:
        ManifestWriteError: If the file cannot be written
    """
    target = Path(path)
    try:
        target.write_bytes(data)
    except OSError as e:
        raise ManifestWriteError.from_diagnostic(
            ManifestDiagnostic(
                code=DiagnosticCode.IO_FAILURE,
                message=f"Failed to write manifest '{target}': {e}",
            )
        ) from e
    logger.debug(f"Wrote {len(data)} bytes to {target}")
