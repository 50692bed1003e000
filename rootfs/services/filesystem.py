# rootfs/services/filesystem.py
from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from rootfs.services.paths import sanitize_filename

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpResult:
    """
    Outcome of one file operation: the text returned to the client and
    whether it describes a success or a failure.
    """
    ok: bool
    text: str

    @classmethod
    def success(cls, text: str) -> "OpResult":
        return cls(True, text)

    @classmethod
    def failure(cls, action: str, exc: BaseException) -> "OpResult":
        return cls(False, f"Error {action}: {exc}")

    def __str__(self) -> str:
        return self.text


def _fmt_time(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


def _creation_time(st: os.stat_result) -> float:
    # st_birthtime only exists on platforms that record it (macOS, BSD, newer Windows builds)
    return getattr(st, "st_birthtime", st.st_ctime)


def _attribute_flags(path: Path, st: os.stat_result) -> str:
    flags: List[str] = []
    if stat.S_ISDIR(st.st_mode):
        flags.append("Directory")
    if not st.st_mode & stat.S_IWUSR:
        flags.append("ReadOnly")
    if path.name.startswith("."):
        flags.append("Hidden")
    if path.is_symlink():
        flags.append("ReparsePoint")
    return ", ".join(flags) if flags else "Normal"


class FileSystemService:
    """
    The five file operations, confined to a single root directory.

    Every public method returns an OpResult and never raises: failures are
    reported as "Error <action>: <message>" text.
    """

    def __init__(self, root: Path):
        root = Path(root)
        if not root.is_dir():
            raise NotADirectoryError(f"Root directory '{root}' does not exist.")
        self.root = root.resolve()

    def _resolve_in_root(self, name: str) -> Path:
        p = Path(os.path.normpath(self.root / sanitize_filename(name)))
        # Only direct children of the root are addressable ("", ".", ".." are not)
        if p == self.root or p.parent != self.root:
            raise PermissionError(f"'{name}' does not name an entry inside the root directory")
        return p

    def _guarded(self, action: str, op: Callable[[], str]) -> OpResult:
        try:
            return OpResult.success(op())
        except Exception as exc:
            logger.warning("%s failed: %s", action, exc)
            return OpResult.failure(action, exc)

    # ---------- Public API ----------

    def read_text_file(
        self, filename: str, head: Optional[int] = None, tail: Optional[int] = None
    ) -> OpResult:
        def op() -> str:
            p = self._resolve_in_root(filename)
            if not p.is_file():
                raise FileNotFoundError(f"File '{filename}' not found in directory.")
            # newline="" keeps a lone "\r" inside its line
            with p.open(encoding="utf-8", newline="") as f:
                lines = f.read().split("\n")
            # head wins when both are given
            if head is not None:
                lines = lines[: max(head, 0)]
            elif tail is not None:
                lines = lines[-tail:] if tail > 0 else []
            return "\n".join(lines)

        return self._guarded("reading file", op)

    def write_file(self, filename: str, content: str) -> OpResult:
        def op() -> str:
            p = self._resolve_in_root(filename)
            p.write_text(content, encoding="utf-8", newline="")
            return f"Successfully wrote to {filename}"

        return self._guarded("writing file", op)

    def list_files(self) -> OpResult:
        def op() -> str:
            names = [p.name for p in self.root.iterdir() if not p.is_dir()]
            return "\n".join(names) if names else "No files found"

        return self._guarded("listing files", op)

    def search_files(self, pattern: str) -> OpResult:
        def op() -> str:
            seen = set()
            names: List[str] = []
            for match in self.root.rglob(pattern):
                p = Path(os.path.normpath(match))
                if p in seen or not p.is_file():
                    continue
                seen.add(p)
                # patterns like "../*" can climb out of the root
                if not p.is_relative_to(self.root):
                    continue
                names.append(p.name)
            return "\n".join(names) if names else "No matches found"

        return self._guarded("searching files", op)

    def get_file_info(self, name: str) -> OpResult:
        def op() -> str:
            p = self._resolve_in_root(name)
            if not p.is_file() and not p.is_dir():
                raise FileNotFoundError(f"Item '{name}' not found in directory.")
            st = p.stat()
            return "\n".join([
                f"Name: {p.name}",
                f"FullName: {p}",
                f"Length: {st.st_size} bytes",
                f"CreationTime: {_fmt_time(_creation_time(st))}",
                f"LastWriteTime: {_fmt_time(st.st_mtime)}",
                f"LastAccessTime: {_fmt_time(st.st_atime)}",
                f"Attributes: {_attribute_flags(p, st)}",
                f"Extension: {p.suffix}",
                f"DirectoryName: {p.parent}",
            ])

        return self._guarded("getting file info", op)
