"""Assets: plugin/theme metadata models and inspectors."""

from .inspector import (
    AssetInspector,
    PluginInspector,
    ThemeInspector,
    get_inspector,
    list_plugin_files,
    snapshot,
)
from .models import (
    AssetKind,
    AssetMetadata,
    ChangeRecord,
    OperationKind,
    Snapshot,
    parse_asset_kind,
    parse_operation_kind,
)

__all__ = [
    "AssetInspector",
    "AssetKind",
    "AssetMetadata",
    "ChangeRecord",
    "OperationKind",
    "PluginInspector",
    "Snapshot",
    "ThemeInspector",
    "get_inspector",
    "list_plugin_files",
    "parse_asset_kind",
    "parse_operation_kind",
    "snapshot",
]
