"""Tests for GitClient against a real git binary."""

import os
import subprocess
import time

import pytest

from tfsbridge.infra.git_client import GitClient, GitCommandError
from tfsbridge.infra.temp_file import scoped_temp_file


class TestGitClient:

    def test_run_returns_stdout(self, git_repo):
        commit = git_repo.commit("a.txt", "a\n", "first")
        assert git_repo.client().run("rev-parse", "HEAD").strip() == commit

    def test_run_raises_on_failure(self, git_repo):
        with pytest.raises(GitCommandError) as excinfo:
            git_repo.client().run("rev-parse", "--verify", "no-such-ref")
        assert excinfo.value.returncode != 0
        assert isinstance(excinfo.value, subprocess.CalledProcessError)
        assert "rev-parse" in str(excinfo.value)

    def test_run_bytes(self, git_repo):
        git_repo.commit("a.bin", "x", "first")
        sha = git_repo.git("rev-parse", "HEAD:a.bin").strip()
        assert git_repo.client().run_bytes("cat-file", "-p", sha) == b"x"

    def test_pipe_feeds_lines(self, git_repo):
        for i in range(3):
            git_repo.commit("a.txt", f"{i}\n", f"change {i}")
        lines = git_repo.client().pipe(["log", "--format=%s"], list)
        assert lines == ["change 2", "change 1", "change 0"]

    def test_pipe_raises_after_handler_sees_output(self, git_repo):
        seen = []
        with pytest.raises(GitCommandError):
            git_repo.client().pipe(["log", "no-such-branch"], lambda lines: seen.extend(lines))
        assert seen == []

    def test_pipe_abandoned_stream_is_not_an_error(self, git_repo):
        for i in range(50):
            git_repo.commit("a.txt", f"{i}\n", f"change {i}")
        first = git_repo.client().pipe(["log", "--format=%s"], lambda lines: next(lines))
        assert first == "change 49"

    def test_pipe_handler_exception_propagates(self, git_repo):
        git_repo.commit("a.txt", "a\n", "first")

        def handler(lines):
            next(lines)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            git_repo.client().pipe(["log"], handler)

    def test_git_dir_is_exported(self, git_repo, tmp_path):
        commit = git_repo.commit("a.txt", "a\n", "first")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        client = GitClient(git_dir=git_repo.path / ".git", work_tree=elsewhere)
        assert client.run("rev-parse", "HEAD").strip() == commit

    def test_subdir_sets_cwd(self, git_repo):
        git_repo.commit("src/a.txt", "a\n", "first")
        client = GitClient(work_tree=git_repo.path, subdir="src")
        assert client.cwd == os.path.join(str(git_repo.path), "src")
        assert client.run("rev-parse", "--show-prefix").strip() == "src/"


class TestScopedTempFile:

    def test_file_exists_inside_scope_only(self):
        with scoped_temp_file() as path:
            assert path.exists()
            path.write_bytes(b"data")
        assert not path.exists()

    def test_removed_on_error(self):
        with pytest.raises(RuntimeError):
            with scoped_temp_file() as path:
                raise RuntimeError("fail")
        assert not path.exists()

    def test_tolerates_early_removal(self):
        with scoped_temp_file() as path:
            path.unlink()
        assert not path.exists()


def _script(tmp_path, body):
    script = tmp_path / "fake-git"
    script.write_text("#!/bin/sh\n" + body)
    script.chmod(0o755)
    return str(script)


@pytest.mark.skipif(os.name != "posix", reason="needs a POSIX shell")
class TestPipeProcessHandling:

    def test_large_stderr_does_not_block(self, tmp_path):
        executable = _script(tmp_path, "echo out\nhead -c 300000 /dev/zero | tr '\\0' x >&2\nexit 3\n")
        seen = []
        with pytest.raises(GitCommandError) as excinfo:
            GitClient(executable=executable, work_tree=tmp_path, timeout=30).pipe([], seen.extend)
        assert seen == ["out"]
        assert excinfo.value.returncode == 3
        assert len(excinfo.value.stderr) == 300000

    def test_timeout_kills_process(self, tmp_path):
        executable = _script(tmp_path, "echo started\nexec >&-\nsleep 30\n")
        client = GitClient(executable=executable, work_tree=tmp_path, timeout=0.5)
        started = time.monotonic()
        with pytest.raises(subprocess.TimeoutExpired):
            client.pipe([], list)
        assert time.monotonic() - started < 10
