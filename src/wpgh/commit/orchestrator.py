"""Commit orchestrator: snapshot, mutate, re-snapshot, commit each changed asset."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from wpgh.assets.inspector import AssetInspector, get_inspector, snapshot
from wpgh.assets.models import AssetKind, OperationKind, parse_asset_kind, parse_operation_kind
from wpgh.core.errors import MissingPriorState, VersionControlFailure

from .diff import diff
from .messages import check_format, render

console = Console()


class Repository(Protocol):
    def stage(self, path: Path) -> None: ...
    def commit(self, message: str, paths: Sequence[Path] = ()) -> None: ...


@dataclass
class CommitReport:
    """Outcome of one run: what was committed, skipped, or failed."""

    committed: list[tuple[str, str]] = field(default_factory=list)  # (identifier, message)
    skipped: list[str] = field(default_factory=list)
    failed: list[tuple[str, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class CommitOrchestrator:
    def __init__(
        self,
        repo: Repository,
        content_dir: Path,
        inspector_factory: Callable[[AssetKind, Path], AssetInspector] = get_inspector,
        message_formats: Mapping[str, Mapping[str, str]] | None = None,
        verbose: bool = False,
    ):
        self.repo = repo
        self.content_dir = content_dir
        self.inspector_factory = inspector_factory
        self.message_formats = message_formats
        self.verbose = verbose

    def asset_dir(self, kind: AssetKind, identifier: str) -> Path:
        return self.content_dir / kind.directory / identifier

    def run(
        self,
        op: OperationKind | str,
        kind: AssetKind | str,
        identifiers: Sequence[str],
        mutate: Callable[[], object],
    ) -> CommitReport:
        kind = parse_asset_kind(kind)
        op = parse_operation_kind(op, kind)
        check_format(op, kind, self.message_formats)
        inspector = self.inspector_factory(kind, self.content_dir)

        before = snapshot(inspector, identifiers)
        if self.verbose:
            for asset in before.values():
                console.print(f"  before: {asset.identifier} {asset.version}", style="dim")

        mutate()

        after = snapshot(inspector, identifiers)
        records = diff(identifiers, before, after)

        report = CommitReport()
        for record in records:
            path = self.asset_dir(kind, record.identifier)
            if not path.exists():
                report.skipped.append(record.identifier)
                continue
            try:
                message = render(op, kind, record, self.message_formats)
                self.repo.stage(path)
                self.repo.commit(message, paths=[path])
            except (MissingPriorState, VersionControlFailure) as e:
                console.print(
                    f"[red]error:[/red] {record.identifier}: {escape(str(e))}", highlight=False
                )
                report.failed.append((record.identifier, e))
                continue
            console.print(
                f"committed [bold]{record.identifier}[/bold] ({escape(message.splitlines()[0])})",
                highlight=False,
            )
            report.committed.append((record.identifier, message))
        return report
