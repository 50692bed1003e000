# rootfs_server/registry.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Type
from pydantic import BaseModel

from rootfs.di import Container
from rootfs.logging import log_tool_call
from rootfs.services.filesystem import OpResult

# Input models and client-facing descriptions live with the stdio adapters.
from rootfs_server.tools.files import (
    ReadTextFileIn, WriteFileIn, ListFilesIn, SearchFilesIn, GetFileInfoIn,
    READ_TEXT_FILE_DESC, WRITE_FILE_DESC, LIST_FILES_DESC, SEARCH_FILES_DESC, GET_FILE_INFO_DESC,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[[BaseModel], OpResult]


class ToolHandlers:
    """
    Named handlers for each tool (no lambdas), bound to one container.
    """
    def __init__(self, container: Container):
        self.container = container

    def read_text_file(self, args: ReadTextFileIn) -> OpResult:
        return self.container.fs_service.read_text_file(args.filename, head=args.head, tail=args.tail)

    def write_file(self, args: WriteFileIn) -> OpResult:
        return self.container.fs_service.write_file(args.filename, args.content)

    def list_files(self, args: ListFilesIn) -> OpResult:
        return self.container.fs_service.list_files()

    def search_files(self, args: SearchFilesIn) -> OpResult:
        return self.container.fs_service.search_files(args.pattern)

    def get_file_info(self, args: GetFileInfoIn) -> OpResult:
        return self.container.fs_service.get_file_info(args.name)


def build_tool_registry(container: Container) -> Dict[str, ToolSpec]:
    """
    Build the registry once at startup from the DI container.
    The HTTP transport reads from it to expose and dispatch tools.
    """
    handlers = ToolHandlers(container)
    specs = [
        ToolSpec("read_text_file", READ_TEXT_FILE_DESC, ReadTextFileIn, handlers.read_text_file),
        ToolSpec("write_file", WRITE_FILE_DESC, WriteFileIn, handlers.write_file),
        ToolSpec("list_files", LIST_FILES_DESC, ListFilesIn, handlers.list_files),
        ToolSpec("search_files", SEARCH_FILES_DESC, SearchFilesIn, handlers.search_files),
        ToolSpec("get_file_info", GET_FILE_INFO_DESC, GetFileInfoIn, handlers.get_file_info),
    ]
    return {spec.name: spec for spec in specs}


def list_tools_payload(registry: Dict[str, ToolSpec]) -> Dict[str, Any]:
    """
    Produce the `tools/list` payload body in MCP form.
    """
    tools = []
    for spec in registry.values():
        tools.append({
            "name": spec.name,
            "description": spec.description,
            "inputSchema": spec.input_model.model_json_schema(),
        })
    return {"tools": tools}


def dispatch_tool_call(
    registry: Dict[str, ToolSpec], name: str, arguments: Dict[str, Any], preview_chars: int = 200
) -> OpResult:
    """
    Validate args with the tool's Pydantic model, then invoke the named handler.
    Raises KeyError for unknown tools and pydantic.ValidationError for bad arguments.
    """
    if name not in registry:
        raise KeyError(f"Tool not found: {name}")
    spec = registry[name]
    args_obj = spec.input_model(**arguments)
    log_tool_call(logger, name, args_obj.model_dump(), preview_chars)
    return spec.handler(args_obj)
