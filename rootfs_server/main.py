# rootfs_server/main.py
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from fastmcp import FastMCP
from rootfs.config import Settings
from rootfs.di import Container, build_container
from rootfs.logging import configure_logging
from rootfs_server.tools.files import register_file_tools

logger = logging.getLogger(__name__)

USAGE = "Usage: rootfs-mcp <directory>"


def resolve_root(argv: Optional[Sequence[str]], settings: Settings) -> Path:
    """
    Pick the root directory from the command line (or ROOT_DIRECTORY) and make it absolute.
    Exits the process with status 1 when it is missing or not a directory.
    """
    parser = argparse.ArgumentParser(description="Filesystem MCP server confined to one directory.")
    parser.add_argument("directory", nargs="?", help="Root directory all file operations are confined to")
    args = parser.parse_args(argv)

    root = args.directory or settings.ROOT_DIRECTORY
    if not root:
        print("Error: directory argument is required.", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        raise SystemExit(1)

    root = Path(root)
    if not root.is_dir():
        print(f"Error: Root directory '{root}' does not exist.", file=sys.stderr)
        raise SystemExit(1)

    root = root.resolve()
    print(f"Root directory set to: {root}", file=sys.stderr)
    return root


def create_app(container: Container) -> FastMCP:
    """
    Create the FastMCP host and register tools against an already-built container.
    Keep the server (protocol) separate from tool/service logic.
    """
    s = container.settings
    mcp = FastMCP(s.SERVER_NAME, version=s.SERVER_VERSION)
    register_file_tools(mcp, container.fs_service, preview_chars=s.LOG_PREVIEW_CHARS)
    return mcp


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = Settings()
    root = resolve_root(argv, settings)
    configure_logging(settings.LOG_LEVEL)

    container = build_container(settings, root=root)
    app = create_app(container)
    logger.info("serving %s over stdio", container.fs_service.root)
    # stdio transport: client (agent/IDE) launches this process and speaks JSON-RPC on stdin/stdout
    app.run(transport="stdio")


if __name__ == "__main__":
    main()
