# rootfs/logging.py
import logging
import re
import sys
from typing import Any, Dict

PII_RE = re.compile(r"([\w\.-]+)@([\w\.-]+)")  # naive email redaction


def configure_logging(level: str = "INFO"):
    # stdout carries the stdio JSON-RPC stream, so logs go to stderr only
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def redact_str(s: str) -> str:
    return PII_RE.sub("[redacted-email]", s)


def preview_str(s: str, limit: int = 200) -> str:
    if len(s) <= limit:
        return s
    return f"{s[:limit]}... ({len(s)} chars)"


def redact_args(args: Dict[str, Any], limit: int = 200) -> Dict[str, Any]:
    safe = dict(args)
    for k, v in list(safe.items()):
        if isinstance(v, str):
            safe[k] = preview_str(redact_str(v), limit)
    return safe


def log_tool_call(logger: logging.Logger, name: str, args: Dict[str, Any], limit: int = 200):
    logger.info("tool_call %s %s", name, redact_args(args, limit))
