"""Asset inspectors: look up installed plugin/theme metadata on disk."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from pathlib import Path
from typing import Protocol

from wpgh.core.utils import read_file_headers

from .models import AssetKind, AssetMetadata, Snapshot

PLUGIN_HEADERS = {
    "Name": "Plugin Name",
    "PluginURI": "Plugin URI",
    "Version": "Version",
    "Description": "Description",
    "Author": "Author",
    "TextDomain": "Text Domain",
}

THEME_HEADERS = {
    "Name": "Theme Name",
    "Version": "Version",
    "Template": "Template",
}


class AssetInspector(Protocol):
    """Read-only view of installed assets of one kind."""

    kind: AssetKind

    def lookup(self, identifier: str) -> AssetMetadata | None: ...
    def known_identifiers(self) -> list[str]: ...
    def scanning(self) -> AbstractContextManager[None]: ...


def _visible(path: Path) -> bool:
    return not path.name.startswith(".")


def list_plugin_files(plugins_dir: Path) -> dict[str, dict[str, str]]:
    """Map plugin file (relative to *plugins_dir*) to its header data.

    Mirrors WordPress: PHP files directly in the plugins directory and one
    level below, kept only when they declare a ``Plugin Name``.
    """
    if not plugins_dir.is_dir():
        return {}

    candidates: list[Path] = []
    for entry in sorted(filter(_visible, plugins_dir.iterdir())):
        if entry.is_dir():
            candidates.extend(
                f
                for f in sorted(filter(_visible, entry.iterdir()))
                if f.is_file() and f.suffix == ".php"
            )
        elif entry.is_file() and entry.suffix == ".php":
            candidates.append(entry)

    plugins: dict[str, dict[str, str]] = {}
    for path in candidates:
        data = read_file_headers(path, PLUGIN_HEADERS)
        if not data["Name"]:
            continue
        plugins[path.relative_to(plugins_dir).as_posix()] = data
    return dict(sorted(plugins.items(), key=lambda item: item[1]["Name"].lower()))


class PluginInspector:
    kind = AssetKind.PLUGIN

    def __init__(self, content_dir: Path):
        self.plugins_dir = content_dir / self.kind.directory
        self._files: dict[str, dict[str, str]] | None = None

    def _plugin_files(self) -> dict[str, dict[str, str]]:
        if self._files is not None:
            return self._files
        return list_plugin_files(self.plugins_dir)

    @contextmanager
    def scanning(self) -> Iterator[None]:
        """Scan the plugins directory once for every lookup inside the block."""
        self._files = list_plugin_files(self.plugins_dir)
        try:
            yield
        finally:
            self._files = None

    def lookup(self, identifier: str) -> AssetMetadata | None:
        for file, data in self._plugin_files().items():
            parent = Path(file).parent.as_posix()
            if file == f"{identifier}.php" or (parent == identifier and identifier != "."):
                return AssetMetadata(
                    identifier=identifier, name=data["Name"], version=data["Version"]
                )
        return None

    def known_identifiers(self) -> list[str]:
        slugs: list[str] = []
        for file in self._plugin_files():
            path = Path(file)
            slug = path.stem if path.parent.as_posix() == "." else path.parent.as_posix()
            if slug not in slugs:
                slugs.append(slug)
        return slugs


class ThemeInspector:
    kind = AssetKind.THEME

    def __init__(self, content_dir: Path):
        self.themes_dir = content_dir / self.kind.directory

    def scanning(self) -> AbstractContextManager[None]:
        return nullcontext()

    def lookup(self, identifier: str) -> AssetMetadata | None:
        if not identifier or identifier in (".", ".."):
            return None
        stylesheet = self.themes_dir / identifier / "style.css"
        if not stylesheet.is_file():
            return None
        data = read_file_headers(stylesheet, THEME_HEADERS)
        # WordPress falls back to the directory name for nameless themes
        return AssetMetadata(
            identifier=identifier, name=data["Name"] or identifier, version=data["Version"]
        )

    def known_identifiers(self) -> list[str]:
        if not self.themes_dir.is_dir():
            return []
        return [
            d.name
            for d in sorted(filter(_visible, self.themes_dir.iterdir()))
            if (d / "style.css").is_file()
        ]


def get_inspector(kind: AssetKind, content_dir: Path) -> AssetInspector:
    if kind is AssetKind.PLUGIN:
        return PluginInspector(content_dir)
    return ThemeInspector(content_dir)


def snapshot(inspector: AssetInspector, identifiers: Iterable[str]) -> Snapshot:
    """Look up each identifier, keeping only the ones that were found."""
    assets: Snapshot = {}
    with inspector.scanning():
        for identifier in identifiers:
            asset = inspector.lookup(identifier)
            if asset is not None:
                assets[identifier] = asset
    return assets
