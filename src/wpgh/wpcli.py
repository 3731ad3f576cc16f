"""WP-CLI wrapper: runs the install/update that wpgh observes."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from wpgh.core.errors import ExternalMutationFailure

console = Console()


class WpCli:
    def __init__(self, wp_bin: str = "wp", wp_path: Path | None = None, verbose: bool = False):
        self.wp_bin = wp_bin
        self.wp_path = wp_path
        self.verbose = verbose

    def build_command(self, args: Sequence[str], flags: Sequence[str] = ()) -> list[str]:
        cmd = [self.wp_bin, *args, *flags]
        if self.wp_path is not None and not any(f.startswith("--path=") for f in flags):
            cmd.append(f"--path={self.wp_path}")
        return cmd

    def run(self, args: Sequence[str], flags: Sequence[str] = ()) -> None:
        """Run ``wp <args> <flags>``; WP-CLI prints its own progress."""
        cmd = self.build_command(args, flags)
        if self.verbose:
            console.print(f"  $ {' '.join(cmd)}", style="dim", highlight=False)
        try:
            result = subprocess.run(cmd)
        except FileNotFoundError as e:
            raise ExternalMutationFailure(f"WP-CLI not found: {self.wp_bin}") from e
        if result.returncode != 0:
            raise ExternalMutationFailure(
                f"'{' '.join(args[:2])}' exited with status {result.returncode}",
                returncode=result.returncode,
            )
