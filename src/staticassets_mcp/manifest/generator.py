"""Manifest generation - validate, render, write.

Validation always completes before the target file is touched, so a failed
run leaves the manifest from the previous successful run in place.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .definitions import ContentRootDefinition, ManifestKind
from .state import ManifestError, ManifestResult
from .validation import validate_definitions
from .writer import render_manifest, serialize_manifest, write_manifest

logger = logging.getLogger(__name__)


@dataclass
class ManifestGenerator:
    """Generates one manifest from a set of content root definitions.

    Usage:
        generator = ManifestGenerator("obj/Microsoft.AspNetCore.StaticAssets.xml", definitions)
        result = generator.execute()
    """

    target_manifest_path: str | Path
    content_root_definitions: Sequence[ContentRootDefinition] = field(default_factory=list)
    kind: ManifestKind = ManifestKind.STATIC_ASSETS

    def build(self) -> tuple[list[ContentRootDefinition], bytes]:
        """Validate the definitions and serialize the manifest without writing it.

        Returns:
            Accepted definitions and the manifest bytes

        Raises:
            ManifestValidationError: If the definitions are incomplete, conflicting
                or hold values XML cannot represent
        """
        accepted = validate_definitions(self.content_root_definitions)
        return accepted, serialize_manifest(render_manifest(accepted, self.kind))

    def execute(self, log: logging.Logger | None = None) -> ManifestResult:
        """Generate the manifest file.

        Args:
            log: Receives one ERROR record per diagnostic. Defaults to this
                module's logger.

        Returns:
            Result with diagnostics; success only if the file was written
        """
        log = log or logger
        target = str(self.target_manifest_path)
        start_time = time.perf_counter()

        result = ManifestResult(
            success=False,
            target_path=target,
            manifest_kind=self.kind.value,
        )

        try:
            accepted, data = self.build()
            write_manifest(target, data)
        except ManifestError as e:
            result.diagnostics = list(e.diagnostics)
            for diagnostic in result.diagnostics:
                log.error(diagnostic.message)
        else:
            result.success = True
            result.written = True
            result.content_roots = len(accepted)
            result.skipped = len(self.content_root_definitions) - len(accepted)
            log.info(
                f"Generated {self.kind.value} manifest with {len(accepted)} "
                f"content root(s): {target}"
            )

        result.duration_ms = (time.perf_counter() - start_time) * 1000
        return result


def generate_manifest(
    definitions: Sequence[ContentRootDefinition],
    target_manifest_path: str | Path,
    kind: ManifestKind | str = ManifestKind.STATIC_ASSETS,
    log: logging.Logger | None = None,
) -> ManifestResult:
    """Validate definitions and write the manifest to target_manifest_path."""
    generator = ManifestGenerator(
        target_manifest_path=target_manifest_path,
        content_root_definitions=list(definitions),
        kind=ManifestKind.parse(kind),
    )
    return generator.execute(log)
