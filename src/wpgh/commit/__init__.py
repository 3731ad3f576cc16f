"""Commit: snapshot diffing, message rendering, per-asset commits."""

from .diff import diff
from .messages import MESSAGE_FORMATS, check_format, get_format, render
from .orchestrator import CommitOrchestrator, CommitReport

__all__ = [
    "MESSAGE_FORMATS",
    "check_format",
    "CommitOrchestrator",
    "CommitReport",
    "diff",
    "get_format",
    "render",
]
