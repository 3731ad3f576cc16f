"""CLI entry point: wpgh <plugin|theme> <install|update> [ASSETS...]."""

from __future__ import annotations

import sys

import click
from rich.console import Console

from .assets import OperationKind, get_inspector, parse_asset_kind, parse_operation_kind
from .commit import CommitOrchestrator, CommitReport
from .core.config import load_config
from .core.errors import ExternalMutationFailure, InvalidArguments
from .core.utils import short_cwd
from .vcs import GitRepository
from .wpcli import WpCli

console = Console()


def _split_args(args: tuple[str, ...]) -> tuple[list[str], list[str]]:
    """Separate asset identifiers from WP-CLI flags (``--version=3.0``)."""
    identifiers: list[str] = []
    flags: list[str] = []
    for a in args:
        (flags if a.startswith("-") else identifiers).append(a)
    return identifiers, flags


def _print_report(report: CommitReport) -> None:
    for identifier in report.skipped:
        console.print(f"  skipped {identifier} (no asset directory)", style="dim")
    if not report.committed and not report.failed:
        console.print("nothing to commit", style="dim")
    if report.failed:
        console.print(f"{len(report.failed)} asset(s) not committed", style="bold red")


def _usage(kind: str, action: str) -> None:
    console.print(
        f"usage: wpgh {kind} {action} <name>... [--all] [wp-cli flags]",
        style="dim",
        highlight=False,
    )


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.argument("kind", required=False, default="")
@click.argument("action", required=False, default="")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--all",
    "all_assets",
    is_flag=True,
    help="Update every installed asset of KIND (no asset names)",
)
@click.option("--wp-path", default=None, help="WordPress root (default: current directory)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def cli(
    kind: str,
    action: str,
    args: tuple[str, ...],
    all_assets: bool,
    wp_path: str | None,
    verbose: bool,
):
    """Run `wp plugin|theme install|update` and commit each changed asset to git."""
    try:
        asset_kind = parse_asset_kind(kind)
        op = parse_operation_kind(action, asset_kind)
    except InvalidArguments as e:
        console.print(f"error: {e}", style="bold", highlight=False)
        sys.exit(1)

    config = load_config(wp_path=wp_path, verbose=verbose)
    identifiers, flags = _split_args(args)

    if all_assets:
        if op is OperationKind.INSTALL:
            console.print("error: --all can only be used with 'update'", style="bold")
            sys.exit(1)
        if identifiers:
            console.print("error: --all cannot be combined with asset names", style="bold")
            _usage(asset_kind.value, op.value)
            sys.exit(1)
        identifiers = get_inspector(asset_kind, config.wp_content_dir).known_identifiers()
        wp_args = [asset_kind.value, op.value, "--all"]
    else:
        if not identifiers:
            _usage(asset_kind.value, op.value)
            sys.exit(1)
        wp_args = [asset_kind.value, op.value, *identifiers]

    if verbose:
        console.print(
            f"  wordpress: {short_cwd(config.wordpress_root)}  "
            f"repo: {short_cwd(config.git_root)}",
            style="dim",
            highlight=False,
        )

    wp = WpCli(config.wp_bin, config.wp_path, verbose=verbose)
    repo = GitRepository(config.git_root, verbose=verbose)
    orchestrator = CommitOrchestrator(
        repo,
        config.wp_content_dir,
        message_formats=config.message_formats,
        verbose=verbose,
    )

    try:
        report = orchestrator.run(op, asset_kind, identifiers, lambda: wp.run(wp_args, flags))
    except ExternalMutationFailure as e:
        console.print(f"error: {e}", style="bold", highlight=False)
        sys.exit(e.returncode or 1)
    except InvalidArguments as e:
        console.print(f"error: {e}", style="bold", highlight=False)
        sys.exit(1)

    _print_report(report)
    if not report.ok:
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
