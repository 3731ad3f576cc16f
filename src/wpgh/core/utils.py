"""File header parsing, path display helpers."""

from __future__ import annotations

import re
from pathlib import Path

HEADER_READ_BYTES = 8 * 1024  # WordPress only looks at the first 8KB


def _cleanup_header_value(value: str) -> str:
    value = re.sub(r"\s*(?:\*/|\?>).*", "", value)
    return value.strip()


def parse_file_headers(raw: str, headers: dict[str, str]) -> dict[str, str]:
    """Extract ``Key: value`` headers from a PHP/CSS comment block.

    *headers* maps the result key to the header label, e.g.
    ``{"Name": "Plugin Name"}``. Missing headers map to ``""``.
    """
    raw = raw.replace("\r", "\n")
    result: dict[str, str] = {}
    for key, label in headers.items():
        pattern = r"^(?:[ \t]*<\?php)?[ \t/*#@]*" + re.escape(label) + r":(.*)$"
        m = re.search(pattern, raw, re.IGNORECASE | re.MULTILINE)
        result[key] = _cleanup_header_value(m.group(1)) if m else ""
    return result


def read_file_headers(path: Path, headers: dict[str, str]) -> dict[str, str]:
    try:
        with path.open("rb") as fh:
            raw = fh.read(HEADER_READ_BYTES)
    except OSError:
        return {key: "" for key in headers}
    return parse_file_headers(raw.decode("utf-8", errors="replace"), headers)


def short_cwd(p: Path) -> str:
    """Return path relative to home directory, using ~ prefix."""
    try:
        rel = p.relative_to(Path.home())
        return f"~/{rel}" if str(rel) != "." else "~"
    except ValueError:
        return str(p)
