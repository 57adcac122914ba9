"""Manifest path policy for the MCP surface.

Security measures:
- Relative paths resolve against the project root
- Paths must stay within the project root
- UNC and device path denial
- Symlinked targets rejected
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class ManifestPolicy:
    """Constrains manifest reads and writes to a project root."""

    workspace_root: str
    allow_unc_paths: bool = False
    allow_device_paths: bool = False

    def __post_init__(self) -> None:
        """Validate and canonicalize workspace root."""
        self.workspace_root = self._validate_path(self.workspace_root, context="workspace_root")

    def _validate_path(self, path: str, context: str = "path") -> str:
        """Validate and canonicalize a path.

        Args:
            path: Path to validate; relative paths resolve against the workspace
            context: Context for error messages

        Returns:
            Canonicalized absolute path

        Raises:
            ValueError: If path is invalid or violates policy
        """
        if not path:
            raise ValueError(f"Empty {context}")

        # Device paths (\\?\, \\.\) start with \\ too, so check them first
        if path.startswith(("\\\\.\\", "\\\\?\\")):
            if not self.allow_device_paths:
                raise ValueError(f"Device paths not allowed in {context}: {path}")
        elif path.startswith("\\\\") and not self.allow_unc_paths:
            raise ValueError(f"UNC paths not allowed in {context}: {path}")

        if context != "workspace_root" and not os.path.isabs(path):
            path = os.path.join(self.workspace_root, path)

        abs_path = os.path.normpath(os.path.abspath(path))

        if os.path.islink(abs_path):
            raise ValueError(f"Symlink not allowed in {context}: {path}")

        return abs_path

    def _ensure_within_workspace(self, validated: str, original: str) -> None:
        try:
            common = os.path.commonpath([validated, self.workspace_root])
        except ValueError as e:
            # Different drives on Windows
            raise ValueError(f"Path outside project root: {original}") from e
        if common != self.workspace_root:
            raise ValueError(f"Path outside project root: {original}")

    def validate_target_path(self, target_path: str) -> str:
        """Validate a manifest output path.

        The parent directory must already exist; it is not created here.

        Returns:
            Validated absolute path

        Raises:
            ValueError: If path is invalid or outside the project root
        """
        validated = self._validate_path(target_path, context="target_manifest_path")
        self._ensure_within_workspace(validated, target_path)
        if os.path.isdir(validated):
            raise ValueError(f"Target manifest path is a directory: {target_path}")
        return validated

    def validate_manifest_path(self, manifest_path: str) -> str:
        """Validate an existing manifest path for reading.

        Raises:
            ValueError: If path is invalid, outside the project root or missing
        """
        validated = self._validate_path(manifest_path, context="manifest_path")
        self._ensure_within_workspace(validated, manifest_path)
        if not Path(validated).is_file():
            raise ValueError(f"Manifest not found: {manifest_path}")
        return validated
