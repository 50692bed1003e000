# rootfs/di.py
from dataclasses import dataclass
from pathlib import Path
from rootfs.config import Settings
from rootfs.services.filesystem import FileSystemService

@dataclass(frozen=True)
class Container:
    settings: Settings
    fs_service: FileSystemService

def build_container(settings: Settings | None = None, root: Path | None = None) -> Container:
    """
    Bind the root directory once; every transport reads it from here.
    An explicit `root` (CLI argument) wins over ROOT_DIRECTORY from the environment.
    """
    s = settings or Settings()
    root = root or s.ROOT_DIRECTORY
    if root is None:
        raise ValueError("Root directory is not configured")
    fs = FileSystemService(root)
    return Container(s, fs)
