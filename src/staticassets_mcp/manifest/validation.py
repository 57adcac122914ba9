"""Content root validation.

Rules:
- Every definition needs a BasePath and a ContentRoot
- Base paths are unique, ignoring case
- Content roots are unique, ignoring case
- Re-declaring an accepted (BasePath, ContentRoot) pair is skipped, not an error
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .definitions import BASE_PATH, CONTENT_ROOT, ContentRootDefinition
from .state import DiagnosticCode, ManifestDiagnostic, ManifestValidationError

logger = logging.getLogger(__name__)


def _missing_metadata(definition: ContentRootDefinition) -> ManifestDiagnostic | None:
    """Report the first required metadata the definition lacks."""
    for name in (BASE_PATH, CONTENT_ROOT):
        if not definition.get_metadata(name):
            return ManifestDiagnostic(
                code=DiagnosticCode.MISSING_METADATA,
                message=f"Missing required metadata '{name}' for '{definition.source_label}'.",
                source_labels=[definition.source_label],
            )
    return None


def ensure_required_metadata(definitions: Sequence[ContentRootDefinition]) -> None:
    """Fail on the first definition missing BasePath or ContentRoot.

    Raises:
        ManifestValidationError: With a single MISSING_METADATA diagnostic
    """
    for definition in definitions:
        diagnostic = _missing_metadata(definition)
        if diagnostic is not None:
            raise ManifestValidationError.from_diagnostic(diagnostic)


def validate_definitions(
    definitions: Sequence[ContentRootDefinition],
) -> list[ContentRootDefinition]:
    """Validate content root definitions and drop exact re-declarations.

    Args:
        definitions: Definitions in build order

    Returns:
        Accepted definitions, in input order

    Raises:
        ManifestValidationError: On missing metadata or conflicting declarations
    """
    ensure_required_metadata(definitions)

    base_paths: dict[str, ContentRootDefinition] = {}
    content_roots: dict[str, ContentRootDefinition] = {}
    accepted: list[ContentRootDefinition] = []

    for definition in definitions:
        existing = base_paths.get(definition.base_path_key)
        if existing is not None:
            if existing.content_root_key == definition.content_root_key:
                logger.debug(
                    f"Skipping '{definition.source_label}': content root "
                    f"'{definition.content_root}' already declared for '{existing.base_path}'"
                )
                continue
            raise ManifestValidationError.from_diagnostic(
                ManifestDiagnostic(
                    code=DiagnosticCode.DUPLICATE_BASE_PATH,
                    message=(
                        f"Duplicate base paths '{definition.base_path}' for content root paths "
                        f"'{definition.content_root}' and '{existing.content_root}'. "
                        f"('{definition.source_label}', '{existing.source_label}')"
                    ),
                    source_labels=[definition.source_label, existing.source_label],
                )
            )

        existing = content_roots.get(definition.content_root_key)
        if existing is not None:
            raise ManifestValidationError.from_diagnostic(
                ManifestDiagnostic(
                    code=DiagnosticCode.DUPLICATE_CONTENT_ROOT,
                    message=(
                        f"Duplicate content root paths '{definition.content_root}' for base paths "
                        f"'{definition.base_path}' and '{existing.base_path}'. "
                        f"('{definition.source_label}', '{existing.source_label}')"
                    ),
                    source_labels=[definition.source_label, existing.source_label],
                )
            )

        base_paths[definition.base_path_key] = definition
        content_roots[definition.content_root_key] = definition
        accepted.append(definition)

    return accepted
