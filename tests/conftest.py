"""Shared fixtures for tfsbridge tests."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, Iterable, List
from unittest.mock import MagicMock

import pytest

from tfsbridge.infra.git_client import GitClient, GitCommandError
from tfsbridge.parsing import format_changeset_footer

TFS_URL = "http://tfs.example.com:8080/tfs"
TRUNK = "$/Project/Trunk"

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def fake_git_client(outputs: Dict[str, Iterable[str]], failures: Dict[str, int] = None) -> MagicMock:
    """
    Build a GitClient mock whose pipe() feeds canned lines to the handler.

    ``outputs`` and ``failures`` are keyed by git subcommand ("config",
    "log", ...). A failing subcommand raises GitCommandError after the
    handler has seen its lines, the way a real late failure does.
    """
    failures = failures or {}
    client = MagicMock(spec=GitClient)

    def pipe(args, handler):
        subcommand = args[0]
        result = handler(iter(list(outputs.get(subcommand, []))))
        if subcommand in failures:
            raise GitCommandError(failures[subcommand], ["git"] + list(args), stderr="fatal: bad revision")
        return result

    client.pipe.side_effect = pipe
    return client


def config_lines(*remotes: Dict[str, str]) -> List[str]:
    """Render ``git config -l`` lines for remotes given as dicts with an 'id' key."""
    lines = ["core.bare=false", "user.name=Dev"]
    for remote in remotes:
        for key, value in remote.items():
            if key != 'id':
                lines.append(f"tfs-remote.{remote['id']}.{key}={value}")
    return lines


def log_lines(commits: List[Dict[str, str]]) -> List[str]:
    """Render ``git log --pretty=medium`` output for commits given newest first."""
    lines = []
    for commit in commits:
        lines.append(f"commit {commit['sha']}")
        lines.append("Author: Dev <dev@example.com>")
        lines.append("Date:   Mon Oct 19 10:00:00 2026 +0000")
        lines.append("")
        lines.append(f"    {commit.get('subject', 'Change')}")
        for body_line in commit.get('body', []):
            lines.append(f"    {body_line}")
        if 'changeset' in commit:
            lines.append("")
            lines.append("    " + format_changeset_footer(
                commit.get('url', TFS_URL), commit.get('repository', TRUNK), commit['changeset']
            ))
        lines.append("")
    return lines


def sha(n: int) -> str:
    return f"{n:040x}"


class GitRepo:
    """A real git repository in a temporary directory."""

    def __init__(self, path: Path):
        self.path = path
        self.env = os.environ.copy()
        self.env.update({
            "GIT_AUTHOR_NAME": "Dev",
            "GIT_AUTHOR_EMAIL": "dev@example.com",
            "GIT_COMMITTER_NAME": "Dev",
            "GIT_COMMITTER_EMAIL": "dev@example.com",
            "GIT_CONFIG_NOSYSTEM": "1",
            "HOME": str(path),
        })
        self.git("init", "-q")

    def git(self, *args: str) -> str:
        result = subprocess.run(
            ["git"] + list(args), cwd=self.path, env=self.env,
            capture_output=True, text=True, check=True
        )
        return result.stdout

    def commit(self, filename: str, content: str, message: str) -> str:
        target = self.path / filename
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        self.git("add", filename)
        self.git("commit", "-q", "-m", message)
        return self.git("rev-parse", "HEAD").strip()

    def client(self) -> GitClient:
        return GitClient(work_tree=self.path)


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """A fresh repository; HOME points inside it so user config is ignored."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    monkeypatch.setenv("HOME", str(repo_dir))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for var in ("GIT_DIR", "GIT_WORK_TREE", "TFSBRIDGE_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    return GitRepo(repo_dir)
