"""MCP Server exposing static assets manifest generation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import Context, FastMCP
from pydantic import AnyUrl

from .manifest import (
    ContentRootItem,
    ManifestError,
    ManifestKind,
    ManifestPolicy,
    ManifestResult,
    generate_manifest,
    read_manifest,
)
from .utils.project import get_default_manifest_kind, get_project_root

logger = logging.getLogger(__name__)

LAST_RESULT_URI = "manifest://last-result"

# Most recent generation (single client mode)
_last_result: ManifestResult | None = None


def get_last_result() -> ManifestResult | None:
    """Result of the most recent generate call, if any."""
    return _last_result


def generate_in_project(
    project_root: str | Path,
    target_manifest_path: str,
    items: list[ContentRootItem],
    manifest_kind: str | None = None,
) -> dict[str, Any]:
    """Generate a manifest inside project_root and return the tool response."""
    global _last_result
    try:
        policy = ManifestPolicy(str(project_root))
        target = policy.validate_target_path(target_manifest_path)
        kind = ManifestKind.parse(manifest_kind) if manifest_kind else get_default_manifest_kind()
    except ValueError as e:
        return {"success": False, "error": str(e)}

    result = generate_manifest(
        [item.to_definition() for item in items],
        target,
        kind,
        log=logger,
    )
    _last_result = result
    if not result.success:
        return {
            "success": False,
            "error": "\n".join(result.errors),
            "data": result.to_dict(),
        }
    return {"success": True, "data": result.to_dict()}


def read_in_project(project_root: str | Path, manifest_path: str) -> dict[str, Any]:
    """Read a manifest inside project_root and return the tool response."""
    try:
        policy = ManifestPolicy(str(project_root))
        path = policy.validate_manifest_path(manifest_path)
        kind, definitions = read_manifest(path)
    except ManifestError as e:
        return {"success": False, **e.to_dict()}
    except ValueError as e:
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "data": {
            "manifestPath": path,
            "manifestKind": kind.value,
            "contentRoots": [
                {"BasePath": d.base_path, "Path": d.content_root} for d in definitions
            ],
        },
    }


def create_server(project_path: str | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        project_path: Root path manifests are constrained to, used when the
            client provides no roots.
    """
    mcp = FastMCP("staticassets-mcp")

    async def resolve_root(ctx: Context) -> Path | None:
        root = await get_project_root(ctx)
        if root is None and project_path:
            root = Path(project_path)
        return root

    async def notify_result_changed(ctx: Context) -> None:
        """Notify client that the last-result resource has changed."""
        try:
            if ctx.session:
                await ctx.session.send_resource_updated(AnyUrl(LAST_RESULT_URI))
        except Exception:
            pass  # Notification failure shouldn't break the tool

    @mcp.tool()
    async def generate_static_assets_manifest(
        ctx: Context,
        target_manifest_path: str,
        content_root_definitions: list[ContentRootItem],
        manifest_kind: str | None = None,
    ) -> dict:
        """
        Generate the static assets manifest for a web project.

        Validates the content root definitions and writes an XML manifest
        mapping each BasePath to its ContentRoot. Nothing is written when
        validation fails; the previous manifest stays in place.

        Validation rules:
        - Every item needs BasePath and ContentRoot
        - BasePath values must be unique (case-insensitive)
        - ContentRoot values must be unique (case-insensitive)
        - Repeating an identical BasePath/ContentRoot pair is allowed and
          produces a single entry

        Args:
            target_manifest_path: Manifest file to write (relative to the project root).
                The directory must already exist.
            content_root_definitions: Items with ItemSpec, BasePath and ContentRoot
            manifest_kind: AspNetCoreStaticAssets (default) or StaticWebAssets
        """
        root = await resolve_root(ctx)
        if root is None:
            return {"success": False, "error": "Cannot determine project root"}
        response = generate_in_project(
            root, target_manifest_path, content_root_definitions, manifest_kind
        )
        await notify_result_changed(ctx)
        return response

    @mcp.tool()
    async def read_static_assets_manifest(ctx: Context, manifest_path: str) -> dict:
        """
        Read the content roots recorded in an existing manifest.

        Args:
            manifest_path: Manifest file (relative to the project root)
        """
        root = await resolve_root(ctx)
        if root is None:
            return {"success": False, "error": "Cannot determine project root"}
        return read_in_project(root, manifest_path)

    @mcp.resource(LAST_RESULT_URI, mime_type="application/json")
    async def last_result_resource() -> str:
        """Result of the most recent manifest generation (JSON).

        Contains: success, target path, content root count, diagnostics.
        Updates when: generate_static_assets_manifest runs.
        """
        result = get_last_result()
        return json.dumps(result.to_dict() if result else {}, indent=2)

    logger.info("Static assets MCP Server initialized")
    return mcp
