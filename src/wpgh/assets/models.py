"""Asset data models: AssetKind, OperationKind, AssetMetadata, ChangeRecord."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wpgh.core.errors import InvalidArguments


class AssetKind(str, Enum):
    PLUGIN = "plugin"
    THEME = "theme"

    @property
    def directory(self) -> str:
        """Directory under wp-content holding assets of this kind."""
        return f"{self.value}s"


class OperationKind(str, Enum):
    INSTALL = "install"
    UPDATE = "update"


@dataclass(frozen=True)
class AssetMetadata:
    """Name and version of one asset at a point in time."""

    identifier: str
    name: str
    version: str = ""


# identifier -> metadata, in lookup order; only holds assets that were found
Snapshot = dict[str, AssetMetadata]


@dataclass(frozen=True)
class ChangeRecord:
    """Before/after pairing for one asset present after an operation."""

    identifier: str
    after: AssetMetadata
    before: AssetMetadata | None = None


def parse_asset_kind(value: str | AssetKind) -> AssetKind:
    try:
        return AssetKind(value)
    except ValueError:
        raise InvalidArguments(
            "'wpgh' can only be run with 'plugin' or 'theme' commands."
        ) from None


def parse_operation_kind(
    value: str | OperationKind, kind: AssetKind | None = None
) -> OperationKind:
    try:
        return OperationKind(value)
    except ValueError:
        prefix = f"wpgh {kind.value}" if kind else "wpgh"
        raise InvalidArguments(
            f"'{prefix}' can only be run with 'update' or 'install' commands."
        ) from None
