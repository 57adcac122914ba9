"""Manifest diagnostics, errors and result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DiagnosticCode(str, Enum):
    """Failure categories reported while generating a manifest."""

    MISSING_METADATA = "missing_metadata"
    DUPLICATE_BASE_PATH = "duplicate_base_path"
    DUPLICATE_CONTENT_ROOT = "duplicate_content_root"
    INVALID_VALUE = "invalid_value"
    IO_FAILURE = "io_failure"
    INVALID_MANIFEST = "invalid_manifest"


@dataclass
class ManifestDiagnostic:
    """Human-readable diagnostic plus the items it refers to."""

    code: DiagnosticCode
    message: str
    source_labels: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.source_labels:
            result["sourceLabels"] = list(self.source_labels)
        return result

    def __str__(self) -> str:
        return self.message


class ManifestError(Exception):
    """Manifest operation error with diagnostics."""

    def __init__(
        self,
        message: str,
        diagnostics: list[ManifestDiagnostic] | None = None,
    ):
        super().__init__(message)
        self.diagnostics = diagnostics or []

    @classmethod
    def from_diagnostic(cls, diagnostic: ManifestDiagnostic) -> ManifestError:
        return cls(diagnostic.message, [diagnostic])

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": str(self),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


class ManifestValidationError(ManifestError):
    """Content root definitions are incomplete or conflicting."""


class ManifestWriteError(ManifestError):
    """The manifest file could not be written."""


@dataclass
class ManifestResult:
    """Result of a manifest generation run."""

    success: bool
    target_path: str
    manifest_kind: str
    diagnostics: list[ManifestDiagnostic] = field(default_factory=list)
    content_roots: int = 0
    skipped: int = 0
    written: bool = False
    duration_ms: float = 0.0

    @property
    def errors(self) -> list[str]:
        """Diagnostic messages in the order they were reported."""
        return [d.message for d in self.diagnostics]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "success": self.success,
            "targetPath": self.target_path,
            "manifestKind": self.manifest_kind,
            "contentRoots": self.content_roots,
            "written": self.written,
            "durationMs": round(self.duration_ms, 2),
        }
        if self.skipped:
            result["skipped"] = self.skipped
        if self.diagnostics:
            result["diagnostics"] = [d.to_dict() for d in self.diagnostics]
        return result

    def to_summary(self) -> str:
        """Generate human-readable summary."""
        status = "[OK] Manifest generated" if self.success else "[FAILED] Manifest not generated"

        parts = [
            status,
            f"  Kind: {self.manifest_kind}",
            f"  Target: {self.target_path}",
        ]
        if self.success:
            parts.append(f"  Content roots: {self.content_roots}")
            if self.skipped:
                parts.append(f"  Skipped re-declarations: {self.skipped}")

        for diagnostic in self.diagnostics:
            parts.append(f"    {diagnostic.message}")

        return "\n".join(parts)
