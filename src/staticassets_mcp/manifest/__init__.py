"""Static assets manifest generation.

Validates content root definitions declared by the build and writes the
manifest that maps each base path to its content root:
- Required BasePath/ContentRoot metadata
- Case-insensitive duplicate detection, exact re-declarations skipped
- Deterministic XML output, self-closed root when empty
"""

from .definitions import (
    MANIFEST_VERSION,
    ContentRootDefinition,
    ContentRootItem,
    ManifestKind,
)
from .generator import ManifestGenerator, generate_manifest
from .policy import ManifestPolicy
from .reader import read_manifest
from .state import (
    DiagnosticCode,
    ManifestDiagnostic,
    ManifestError,
    ManifestResult,
    ManifestValidationError,
    ManifestWriteError,
)
from .validation import validate_definitions
from .writer import render_manifest, serialize_manifest, write_manifest

__all__ = [
    "MANIFEST_VERSION",
    "ContentRootDefinition",
    "ContentRootItem",
    "ManifestKind",
    "ManifestGenerator",
    "generate_manifest",
    "ManifestPolicy",
    "read_manifest",
    "DiagnosticCode",
    "ManifestDiagnostic",
    "ManifestError",
    "ManifestResult",
    "ManifestValidationError",
    "ManifestWriteError",
    "validate_definitions",
    "render_manifest",
    "serialize_manifest",
    "write_manifest",
]
