"""Project root and default settings.

The project root is taken from, in order:
1. MCP Roots from client (via Context.list_roots())
2. Environment variables (STATICASSETS_PROJECT_ROOT, MCP_PROJECT_ROOT)
3. Explicit --project path
4. Startup CWD, searched upward for .NET markers when --project-from-cwd is used
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from ..manifest.definitions import ManifestKind

if TYPE_CHECKING:
    from mcp.server.fastmcp import Context

logger = logging.getLogger(__name__)

MANIFEST_KIND_ENV_VAR = "STATICASSETS_MANIFEST_KIND"


@dataclass
class ProjectRootConfig:
    """Settings that affect how the project root is determined."""

    startup_cwd: Path | None = None
    use_project_from_cwd: bool = False
    explicit_project_path: Path | None = None
    env_var_names: tuple[str, ...] = field(
        default_factory=lambda: ("STATICASSETS_PROJECT_ROOT", "MCP_PROJECT_ROOT")
    )


_config: ProjectRootConfig = ProjectRootConfig()


def configure_project_root(
    *,
    use_project_from_cwd: bool = False,
    explicit_project_path: str | Path | None = None,
    startup_cwd: str | Path | None = None,
) -> None:
    """Configure project root detection. Called once at server startup."""
    global _config
    _config = ProjectRootConfig(
        use_project_from_cwd=use_project_from_cwd,
        explicit_project_path=Path(explicit_project_path) if explicit_project_path else None,
        startup_cwd=Path(startup_cwd) if startup_cwd else None,
    )
    logger.debug(
        f"Project root configured: use_cwd={use_project_from_cwd}, "
        f"explicit={explicit_project_path}, startup_cwd={startup_cwd}"
    )


def get_config() -> ProjectRootConfig:
    """Get current project root configuration."""
    return _config


def get_default_manifest_kind() -> ManifestKind:
    """Manifest kind from STATICASSETS_MANIFEST_KIND, AspNetCoreStaticAssets if unset."""
    value = os.environ.get(MANIFEST_KIND_ENV_VAR)
    if not value:
        return ManifestKind.STATIC_ASSETS
    try:
        return ManifestKind.parse(value)
    except ValueError:
        logger.warning(f"{MANIFEST_KIND_ENV_VAR}={value} is not a manifest kind, using default")
        return ManifestKind.STATIC_ASSETS


def parse_file_uri(uri: str) -> Path | None:
    """Parse a file:// URI to an absolute Path, or None if it is not one."""
    parsed = urlparse(str(uri))
    if parsed.scheme != "file":
        logger.warning(f"Not a file URI: {uri}")
        return None

    path_str = unquote(parsed.path)
    if sys.platform == "win32":
        # file:///C:/path gives "/C:/path"
        if path_str.startswith("/") and len(path_str) > 2 and path_str[2] == ":":
            path_str = path_str[1:]
        if parsed.netloc:
            path_str = f"\\\\{parsed.netloc}{path_str}"

    path = Path(path_str)
    if not path.is_absolute():
        logger.warning(f"Parsed path is not absolute: {path}")
        return None
    return path


def find_dotnet_project_root(start_dir: Path | None = None, boundary: Path | None = None) -> Path:
    """Find .NET project root by walking up from a directory.

    Searches for .sln first, then .csproj/.vbproj/.fsproj, then .git.
    The search does not go above boundary when one is given.

    Returns:
        Directory holding the first marker found, else start_dir
    """
    current = (start_dir or Path.cwd()).resolve()
    stop = boundary.resolve() if boundary is not None else None

    def ancestors() -> Iterator[Path]:
        yield current
        if current == stop:
            return
        for parent in current.parents:
            yield parent
            if parent == stop:
                return

    def has_project_file(directory: Path) -> bool:
        return any(
            any(directory.glob(pattern)) for pattern in ("*.csproj", "*.vbproj", "*.fsproj")
        )

    for directory in ancestors():
        if any(directory.glob("*.sln")):
            return directory

    for directory in ancestors():
        if has_project_file(directory):
            return directory

    for directory in ancestors():
        if (directory / ".git").exists():  # file for worktrees
            return directory

    return current


def _configured_root() -> Path | None:
    config = get_config()

    for env_var in config.env_var_names:
        env_value = os.environ.get(env_var)
        if env_value:
            path = Path(env_value)
            if path.is_dir():
                logger.info(f"Using project root from {env_var}: {path}")
                return path
            logger.warning(f"{env_var}={env_value} - path does not exist or is not a directory")

    if config.explicit_project_path:
        if config.explicit_project_path.is_dir():
            return config.explicit_project_path
        logger.warning(f"Explicit project path not valid: {config.explicit_project_path}")

    if config.use_project_from_cwd and config.startup_cwd:
        return find_dotnet_project_root(config.startup_cwd)

    return config.startup_cwd


async def get_project_root(ctx: Context | None = None) -> Path | None:
    """Determine the project root, preferring roots offered by the MCP client."""
    if ctx is not None:
        try:
            roots = await ctx.list_roots()
        except Exception as e:
            # Client may not support roots
            logger.info(f"Could not get roots from client: {e}")
            roots = []
        if roots:
            path = parse_file_uri(str(roots[0].uri))
            if path and path.is_dir():
                logger.info(f"Using project root from MCP client: {path}")
                return path
            logger.warning(f"MCP root path invalid or not accessible: {path}")

    root = _configured_root()
    if root is None:
        logger.warning("Could not determine project root from any source")
    return root
