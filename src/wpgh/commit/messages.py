"""Commit message templates and rendering."""

from __future__ import annotations

from collections.abc import Mapping
from string import Formatter

from wpgh.assets.models import AssetKind, AssetMetadata, ChangeRecord, OperationKind
from wpgh.core.errors import InvalidArguments, MissingPriorState

MESSAGE_FORMATS: dict[AssetKind, dict[OperationKind, str]] = {
    AssetKind.PLUGIN: {
        OperationKind.INSTALL: "Install plugin: {id}.\n\nName: {name}\nVersion: {version}",
        OperationKind.UPDATE: (
            "Update plugin: {id}.\n\n"
            "Name: {name}\nNew version: {version}\nPrevious version: {prev_version}"
        ),
    },
    AssetKind.THEME: {
        OperationKind.INSTALL: "Install theme: {id}.\n\nName: {name}\nVersion: {version}",
        OperationKind.UPDATE: (
            "Update theme: {id}.\n\n"
            "Name: {name}\nNew version: {version}\nPrevious version: {prev_version}"
        ),
    },
}


def get_format(
    op: OperationKind,
    kind: AssetKind,
    overrides: Mapping[str, Mapping[str, str]] | None = None,
) -> str:
    """Template for (kind, op); *overrides* is keyed by plain strings, as in settings.json."""
    if overrides:
        custom = overrides.get(kind.value, {}).get(op.value)
        if custom:
            return custom
    return MESSAGE_FORMATS[kind][op]


def _check_fields(
    template: object, allowed: set[str], op: OperationKind, kind: AssetKind
) -> None:
    """Only bare placeholders are allowed: no attribute, index or nested fields."""
    label = f"{kind.value} {op.value} message template"
    if not isinstance(template, str):
        raise InvalidArguments(f"bad {label}: expected a string, got {type(template).__name__}")
    try:
        parsed = list(Formatter().parse(template))
    except ValueError as e:
        raise InvalidArguments(f"bad {label}: {e}") from e
    for _, field_name, format_spec, _ in parsed:
        if field_name is None:
            continue
        if field_name not in allowed:
            raise InvalidArguments(f"bad {label}: unknown placeholder {{{field_name}}}")
        if format_spec and "{" in format_spec:
            raise InvalidArguments(f"bad {label}: nested placeholder in {{{field_name}}}")


def render(
    op: OperationKind,
    kind: AssetKind,
    record: ChangeRecord,
    formats: Mapping[str, Mapping[str, str]] | None = None,
) -> str:
    fields = {
        "id": record.identifier,
        "name": record.after.name,
        "version": record.after.version,
    }
    if op is OperationKind.UPDATE:
        if record.before is None:
            raise MissingPriorState(record.identifier)
        fields["prev_version"] = record.before.version

    template = get_format(op, kind, formats)
    _check_fields(template, set(fields), op, kind)
    try:
        return template.format(**fields)
    except (KeyError, IndexError, ValueError, AttributeError, TypeError) as e:
        raise InvalidArguments(f"bad {kind.value} {op.value} message template: {e}") from e


def check_format(
    op: OperationKind,
    kind: AssetKind,
    formats: Mapping[str, Mapping[str, str]] | None = None,
) -> None:
    """Raise InvalidArguments if the (possibly overridden) template cannot render."""
    sample = ChangeRecord(
        identifier="asset",
        after=AssetMetadata(identifier="asset", name="Asset", version="2.0"),
        before=AssetMetadata(identifier="asset", name="Asset", version="1.0"),
    )
    render(op, kind, sample, formats)
