"""Configuration: env, settings files, WordPress paths."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

PROJECT_DIR_NAME = ".wpgh"


@dataclass
class Config:
    cwd: Path = field(default_factory=Path.cwd)
    global_dir: Path = field(default_factory=lambda: Path.home() / ".wpgh")
    wp_path: Path | None = None  # WordPress root; None = cwd
    content_dir: Path | None = None  # None = <wp_path>/wp-content
    repo_root: Path | None = None  # None = wp_path
    wp_bin: str = "wp"
    message_formats: dict[str, dict[str, str]] = field(default_factory=dict)
    verbose: bool = False

    @property
    def wordpress_root(self) -> Path:
        return self.wp_path if self.wp_path is not None else self.cwd

    @property
    def wp_content_dir(self) -> Path:
        if self.content_dir is not None:
            return self.content_dir
        return self.wordpress_root / "wp-content"

    @property
    def git_root(self) -> Path:
        return self.repo_root if self.repo_root is not None else self.wordpress_root

    @property
    def project_dir(self) -> Path:
        return self.wordpress_root / PROJECT_DIR_NAME


def _read_settings(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def _resolve(config: Config, value: str) -> Path:
    p = Path(value).expanduser()
    return p if p.is_absolute() else (config.cwd / p).resolve()


def _apply_settings(config: Config, path: Path) -> None:
    """Apply a single settings.json file to config."""
    data = _read_settings(path)
    if not data:
        return
    if wp_path := data.get("wpPath"):
        config.wp_path = _resolve(config, wp_path)
    if content_dir := data.get("contentDir"):
        config.content_dir = _resolve(config, content_dir)
    if repo_root := data.get("repoRoot"):
        config.repo_root = _resolve(config, repo_root)
    if wp_bin := data.get("wpBin"):
        config.wp_bin = wp_bin

    messages = data.get("messages")
    if isinstance(messages, dict):
        for kind, formats in messages.items():
            if isinstance(formats, dict):
                config.message_formats.setdefault(kind, {}).update(
                    (op, fmt) for op, fmt in formats.items() if isinstance(fmt, str)
                )


def load_config(
    wp_path: str | None = None,
    verbose: bool = False,
) -> Config:
    """Load config with priority: CLI args > env > .env > settings.json > defaults."""
    load_dotenv()

    config = Config()
    config.verbose = verbose

    _apply_settings(config, config.global_dir / "settings.json")

    # The project settings live under the WordPress root, which may itself
    # be moved by env or CLI, so resolve it before reading them.
    if env_wp_path := os.getenv("WPGH_WP_PATH"):
        config.wp_path = _resolve(config, env_wp_path)
    if wp_path:
        config.wp_path = _resolve(config, wp_path)

    _apply_settings(config, config.project_dir / "settings.json")
    _apply_settings(config, config.project_dir / "settings.local.json")

    if env_wp_path:
        config.wp_path = _resolve(config, env_wp_path)
    if content_dir := os.getenv("WPGH_CONTENT_DIR"):
        config.content_dir = _resolve(config, content_dir)
    if repo_root := os.getenv("WPGH_REPO_ROOT"):
        config.repo_root = _resolve(config, repo_root)
    if wp_bin := os.getenv("WPGH_WP_BIN"):
        config.wp_bin = wp_bin

    if wp_path:
        config.wp_path = _resolve(config, wp_path)

    return config
