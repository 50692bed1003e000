# rootfs/services/paths.py
import os


def sanitize_filename(filename: str) -> str:
    """
    Flatten a client-supplied name to its final path segment.

    Both '/' and '\\' count as separators, so "../../etc/passwd" and
    "sub\\dir\\name" become "passwd" and "name". When no segment is left
    (empty input, trailing separator) the input is returned unchanged and the
    caller's filesystem call is expected to reject it.
    """
    normalized = filename.replace("/", os.sep).replace("\\", os.sep)
    name = os.path.basename(normalized)
    return name if name else filename
