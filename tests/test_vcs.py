"""Tests for GitRepository: stage/commit command lines and failure mapping."""

import shutil
import subprocess
from unittest.mock import patch

import pytest

from wpgh.core.errors import VersionControlFailure
from wpgh.vcs import GitRepository


def _done(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestStage:
    def test_adds_relative_path(self, tmp_path):
        target = tmp_path / "wp-content" / "plugins" / "jetpack"
        target.mkdir(parents=True)
        with patch("wpgh.vcs.subprocess.run", return_value=_done()) as run:
            GitRepository(tmp_path).stage(target)
        cmd = run.call_args.args[0]
        assert cmd == ["git", "add", "--all", "--", "wp-content/plugins/jetpack"]
        assert run.call_args.kwargs["cwd"] == str(tmp_path)

    def test_failure_carries_stderr(self, tmp_path):
        err = "fatal: not a git repository (or any of the parent directories): .git"
        with patch("wpgh.vcs.subprocess.run", return_value=_done(128, stderr=err)):
            with pytest.raises(VersionControlFailure, match="not a git repository") as exc:
                GitRepository(tmp_path).stage(tmp_path / "x")
        assert exc.value.stderr == err
        assert exc.value.path == "x"

    def test_missing_git(self, tmp_path):
        with patch("wpgh.vcs.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(VersionControlFailure, match="cannot run git"):
                GitRepository(tmp_path).stage(tmp_path / "x")


class TestCommit:
    def test_commit_limited_to_paths(self, tmp_path):
        with patch("wpgh.vcs.subprocess.run", return_value=_done()) as run:
            GitRepository(tmp_path).commit("Install plugin: jetpack.", [tmp_path / "a" / "b"])
        assert run.call_args.args[0] == [
            "git", "commit", "-m", "Install plugin: jetpack.", "--", "a/b",
        ]

    def test_commit_without_paths(self, tmp_path):
        with patch("wpgh.vcs.subprocess.run", return_value=_done()) as run:
            GitRepository(tmp_path).commit("msg")
        assert run.call_args.args[0] == ["git", "commit", "-m", "msg"]

    def test_nothing_to_commit(self, tmp_path):
        out = "nothing to commit, working tree clean"
        with patch("wpgh.vcs.subprocess.run", return_value=_done(1, stdout=out)):
            with pytest.raises(VersionControlFailure, match="nothing to commit"):
                GitRepository(tmp_path).commit("msg", [tmp_path / "a"])


def _git(root, *args):
    return subprocess.run(
        ["git", *args], cwd=str(root), capture_output=True, text=True, check=True
    ).stdout


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestRealRepository:
    @pytest.fixture
    def repo_root(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
        monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
        for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
            monkeypatch.setenv(var, "wpgh")
        for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
            monkeypatch.setenv(var, "wpgh@example.com")
        root = tmp_path / "site"
        plugin = root / "wp-content" / "plugins" / "jetpack"
        plugin.mkdir(parents=True)
        (plugin / "jetpack.php").write_text("<?php // 3.0\n")
        (plugin / "old.php").write_text("<?php\n")
        (root / "wp-config.php").write_text("<?php\n")
        _git(root, "init", "-q")
        _git(root, "add", "-A")
        _git(root, "commit", "-q", "-m", "initial")
        return root

    def test_commit_holds_only_the_asset(self, repo_root):
        plugin = repo_root / "wp-content" / "plugins" / "jetpack"
        (plugin / "jetpack.php").write_text("<?php // 3.1\n")
        (plugin / "old.php").unlink()
        (repo_root / "wp-config.php").write_text("<?php // edited\n")
        _git(repo_root, "add", "wp-config.php")

        repo = GitRepository(repo_root)
        repo.stage(plugin)
        repo.commit("Update plugin: jetpack.", [plugin])

        assert _git(repo_root, "log", "-1", "--format=%B").strip() == "Update plugin: jetpack."
        changed = _git(repo_root, "show", "--name-status", "--format=", "HEAD").split("\n")
        assert "M\twp-content/plugins/jetpack/jetpack.php" in changed
        assert "D\twp-content/plugins/jetpack/old.php" in changed
        assert not any("wp-config.php" in line for line in changed)
        assert _git(repo_root, "diff", "--cached", "--name-only").split() == ["wp-config.php"]

    def test_nothing_to_commit_raises(self, repo_root):
        plugin = repo_root / "wp-content" / "plugins" / "jetpack"
        repo = GitRepository(repo_root)
        repo.stage(plugin)
        with pytest.raises(VersionControlFailure):
            repo.commit("Update plugin: jetpack.", [plugin])

    def test_not_a_repository(self, tmp_path, monkeypatch):
        plain = tmp_path / "plain"
        plain.mkdir()
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        with pytest.raises(VersionControlFailure, match="not a git repository"):
            GitRepository(plain).stage(plain)
