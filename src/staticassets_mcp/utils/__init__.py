"""Utility modules for staticassets-mcp."""

from .project import (
    ProjectRootConfig,
    configure_project_root,
    find_dotnet_project_root,
    get_default_manifest_kind,
    get_project_root,
    parse_file_uri,
)

__all__ = [
    "ProjectRootConfig",
    "configure_project_root",
    "find_dotnet_project_root",
    "get_default_manifest_kind",
    "get_project_root",
    "parse_file_uri",
]
