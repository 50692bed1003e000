# rootfs_server/tools/files.py
import logging
from typing import Optional
from pydantic import BaseModel, Field
from fastmcp import FastMCP
from rootfs.logging import log_tool_call

logger = logging.getLogger(__name__)

READ_TEXT_FILE_DESC = (
    "Read the complete contents of a file from the directory as text. "
    "Provides detailed error messages if the file cannot be read. "
    "Use this tool when you need to examine the contents of a single file. "
    "Use the 'head' parameter to read only the first N lines of a file, or the 'tail' "
    "parameter to read only the last N lines of a file ('head' wins if both are given). "
    "Operates on the file as text regardless of extension. "
    "File must be in the directory specified at startup."
)
WRITE_FILE_DESC = (
    "Create or overwrite a text file with specific content inside the startup directory. "
    "If the file already exists, its entire content will be replaced with the new data. "
    "Use with caution, as it will overwrite without confirmation. "
    "All text is saved as UTF-8."
)
LIST_FILES_DESC = (
    "Get a listing of all files in the directory. "
    "Returns only file names, excluding directories."
)
SEARCH_FILES_DESC = (
    "Recursively search for files matching a glob pattern in the directory. "
    "Use a pattern like '*.ext' to match files in the directory and all subdirectories. "
    "Returns the file names of all matching files. "
    "Searches only within the directory specified at startup."
)
GET_FILE_INFO_DESC = (
    "Retrieve detailed metadata about a file or directory in the directory: "
    "size, creation, modification and access times, attributes and extension. "
    "Does not read the content. "
    "Item must be in the directory specified at startup."
)


class ReadTextFileIn(BaseModel):
    filename: str = Field(..., description="The filename to read from the directory")
    head: Optional[int] = Field(None, description="If provided, returns only the first N lines of the file")
    tail: Optional[int] = Field(None, description="If provided, returns only the last N lines of the file")


class WriteFileIn(BaseModel):
    filename: str = Field(..., description="The filename to write in the directory")
    content: str = Field(..., description="The content to write to the file")


class ListFilesIn(BaseModel):
    pass


class SearchFilesIn(BaseModel):
    pattern: str = Field(..., description="The glob pattern to match files against")


class GetFileInfoIn(BaseModel):
    name: str = Field(..., description="The file or directory name in the directory")


def register_file_tools(mcp: FastMCP, fs_service, preview_chars: int = 200):
    """
    Very thin tool adapters:
    - validate/deserialize inputs (Pydantic)
    - call the service (confinement + error formatting)
    - return the result text verbatim
    """

    @mcp.tool(name="read_text_file", description=READ_TEXT_FILE_DESC)
    def read_text_file(input: ReadTextFileIn) -> str:
        log_tool_call(logger, "read_text_file", input.model_dump(), preview_chars)
        return fs_service.read_text_file(input.filename, head=input.head, tail=input.tail).text

    @mcp.tool(name="write_file", description=WRITE_FILE_DESC)
    def write_file(input: WriteFileIn) -> str:
        log_tool_call(logger, "write_file", input.model_dump(), preview_chars)
        return fs_service.write_file(input.filename, input.content).text

    @mcp.tool(name="list_files", description=LIST_FILES_DESC)
    def list_files() -> str:
        log_tool_call(logger, "list_files", {}, preview_chars)
        return fs_service.list_files().text

    @mcp.tool(name="search_files", description=SEARCH_FILES_DESC)
    def search_files(input: SearchFilesIn) -> str:
        log_tool_call(logger, "search_files", input.model_dump(), preview_chars)
        return fs_service.search_files(input.pattern).text

    @mcp.tool(name="get_file_info", description=GET_FILE_INFO_DESC)
    def get_file_info(input: GetFileInfoIn) -> str:
        log_tool_call(logger, "get_file_info", input.model_dump(), preview_chars)
        return fs_service.get_file_info(input.name).text
