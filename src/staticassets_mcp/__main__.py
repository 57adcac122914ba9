"""Entry point for staticassets-mcp."""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .manifest import ContentRootItem, ManifestKind, generate_manifest
from .utils.project import configure_project_root, find_dotnet_project_root, get_default_manifest_kind

ITEMS_ADAPTER = TypeAdapter(list[ContentRootItem])


def configure_logging() -> None:
    """Configure logging based on environment."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Static assets manifest generator for .NET web projects"
    )
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate", help="Validate content root definitions and write the manifest."
    )
    generate.add_argument(
        "--target",
        default=None,
        help="Manifest file to write. Any existing file is replaced. "
        "Defaults to the well-known file name for the manifest kind in the current directory.",
    )
    generate.add_argument(
        "--definitions",
        required=True,
        help="JSON file with an array of {ItemSpec, BasePath, ContentRoot} items.",
    )
    generate.add_argument(
        "--kind",
        choices=[kind.value for kind in ManifestKind],
        default=None,
        help="Manifest root element. Defaults to $STATICASSETS_MANIFEST_KIND "
        "or AspNetCoreStaticAssets.",
    )

    serve = subparsers.add_parser("serve", help="Run the MCP server over stdio (default).")
    serve.add_argument(
        "--project",
        type=str,
        default=None,
        help="Project root path. Manifest reads and writes are constrained to this path.",
    )
    serve.add_argument(
        "--project-from-cwd",
        action="store_true",
        default=False,
        help="Auto-detect project from current working directory. "
        "Searches upward for .sln, .csproj/.vbproj/.fsproj, or .git markers. "
        "Cannot be used with --project.",
    )
    return parser.parse_args(argv)


def load_definitions(path: str | Path) -> list[ContentRootItem]:
    """Load content root items from a JSON definitions file.

    Raises:
        OSError: If the file cannot be read
        ValidationError: If the file is not an array of items
    """
    return ITEMS_ADAPTER.validate_json(Path(path).read_bytes())


def run_generate(args: argparse.Namespace) -> int:
    """Generate one manifest; returns the process exit code."""
    logger = logging.getLogger("staticassets_mcp.generate")

    try:
        items = load_definitions(args.definitions)
    except (OSError, ValidationError) as e:
        logger.error(f"Cannot load content root definitions from {args.definitions}: {e}")
        return 1

    kind = ManifestKind.parse(args.kind) if args.kind else get_default_manifest_kind()
    target = args.target or kind.file_name
    result = generate_manifest(
        [item.to_definition() for item in items],
        target,
        kind,
        log=logger,
    )
    logger.info(result.to_summary())
    return 0 if result.success else 1


async def serve(args: argparse.Namespace) -> None:
    """Run the MCP server until the client disconnects."""
    from .server import create_server

    logger = logging.getLogger(__name__)

    project = getattr(args, "project", None)
    project_from_cwd = getattr(args, "project_from_cwd", False)
    if project_from_cwd:
        if project is not None:
            logger.error("--project-from-cwd cannot be used with --project")
            sys.exit(1)
        project_path = str(find_dotnet_project_root())
        logger.info(f"Auto-detected project root: {project_path}")
    else:
        project_path = project or os.getcwd()

    configure_project_root(
        use_project_from_cwd=project_from_cwd,
        explicit_project_path=project,
        startup_cwd=os.getcwd(),
    )

    logger.info(f"Starting static assets MCP Server (project: {project_path})...")
    mcp = create_server(project_path)

    try:
        await mcp.run_stdio_async()
    except Exception:
        logger.exception("Server error")
        raise
    finally:
        logger.info("Server stopped")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    configure_logging()
    args = parse_args(argv)

    if args.command == "generate":
        return run_generate(args)

    try:
        asyncio.run(serve(args))
    except KeyboardInterrupt:
        pass
    return 0


def run() -> None:
    """Run the command line interface."""
    sys.exit(main())


if __name__ == "__main__":
    run()
