"""Git repository handle: stage and commit through the git binary."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from wpgh.core.errors import VersionControlFailure

console = Console()


class GitRepository:
    """A working tree rooted at *root*. Opened once per wpgh invocation."""

    def __init__(self, root: Path, verbose: bool = False):
        self.root = root
        self.verbose = verbose

    def _run(self, args: list[str], path: str = "") -> str:
        cmd = ["git", *args]
        if self.verbose:
            console.print(f"  $ {' '.join(cmd)}", style="dim", highlight=False)
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(self.root),
                capture_output=True,
                text=True,
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            raise VersionControlFailure(f"cannot run git in {self.root}: {e}", path=path) from e
        if proc.returncode != 0:
            stderr = proc.stderr.strip() or proc.stdout.strip()
            raise VersionControlFailure(
                f"git {args[0]} failed: {stderr}", path=path, stderr=stderr
            )
        return proc.stdout

    def _relative(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return str(path)

    def stage(self, path: Path) -> None:
        rel = self._relative(path)
        self._run(["add", "--all", "--", rel], path=rel)

    def commit(self, message: str, paths: Sequence[Path] = ()) -> None:
        """Commit staged changes; with *paths*, only changes under those paths."""
        rels = [self._relative(p) for p in paths]
        args = ["commit", "-m", message]
        if rels:
            args += ["--", *rels]
        self._run(args, path=", ".join(rels))
