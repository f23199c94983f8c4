"""Tests for ObjectService."""

import io
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from tfsbridge.infra.git_client import GitClient, GitCommandError
from tfsbridge.services.object_service import ObjectService

EMPTY_BLOB = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
NEW_BLOB = "ce013625030ba8dba906f756967f9e9ca394464a"


@pytest.fixture
def mock_git_client():
    return MagicMock(spec=GitClient)


class TestLookup:

    @pytest.mark.parametrize("commit,path", [(None, "README.md"), ("HEAD", None), (None, None)])
    def test_missing_argument_runs_nothing(self, mock_git_client, commit, path):
        service = ObjectService(mock_git_client)
        assert service.lookup(commit, path) is None
        mock_git_client.run.assert_not_called()

    def test_parses_listing(self, mock_git_client):
        mock_git_client.run.return_value = f"100644 blob {EMPTY_BLOB}\tREADME.md\0"
        ref = ObjectService(mock_git_client).lookup("HEAD", "README.md")
        assert ref.mode == "100644"
        assert ref.object_type == "blob"
        assert ref.sha == EMPTY_BLOB
        assert ref.path == "README.md"
        assert ref.commit == "HEAD"
        mock_git_client.run.assert_called_once_with("ls-tree", "-z", "HEAD", "./README.md")

    def test_absent_path(self, mock_git_client):
        mock_git_client.run.return_value = ""
        assert ObjectService(mock_git_client).lookup("HEAD", "missing.txt") is None

    def test_command_failure_propagates(self, mock_git_client):
        mock_git_client.run.side_effect = GitCommandError(128, ["git", "ls-tree"], stderr="fatal: Not a valid object name")
        with pytest.raises(GitCommandError):
            ObjectService(mock_git_client).lookup("nope", "README.md")


class TestInsert:

    def test_insert_file_returns_trimmed_hash(self, mock_git_client):
        mock_git_client.run.return_value = f"{NEW_BLOB}  \n"
        assert ObjectService(mock_git_client).insert_file("/tmp/x") == NEW_BLOB
        mock_git_client.run.assert_called_once_with("hash-object", "-w", "/tmp/x")

    def test_insert_file_without_output(self, mock_git_client):
        mock_git_client.run.return_value = ""
        with pytest.raises(ValueError):
            ObjectService(mock_git_client).insert_file("/tmp/x")

    def test_insert_bytes_writes_content_and_cleans_up(self, mock_git_client):
        seen = {}

        def run(*args):
            path = Path(args[-1])
            seen['path'] = path
            seen['content'] = path.read_bytes()
            return NEW_BLOB + "\n"

        mock_git_client.run.side_effect = run
        assert ObjectService(mock_git_client).insert_bytes(b"hello\n") == NEW_BLOB
        assert seen['content'] == b"hello\n"
        assert not seen['path'].exists()

    def test_insert_stream(self, mock_git_client):
        seen = {}

        def run(*args):
            seen['content'] = Path(args[-1]).read_bytes()
            return NEW_BLOB

        mock_git_client.run.side_effect = run
        ObjectService(mock_git_client).insert_bytes(io.BytesIO(b"\x00binary\xff"))
        assert seen['content'] == b"\x00binary\xff"

    def test_temp_file_removed_when_git_fails(self, mock_git_client):
        seen = {}

        def run(*args):
            seen['path'] = Path(args[-1])
            raise GitCommandError(128, ["git", "hash-object"], stderr="fatal: unable to write")

        mock_git_client.run.side_effect = run
        with pytest.raises(GitCommandError):
            ObjectService(mock_git_client).insert_bytes(b"data")
        assert not seen['path'].exists()

    def test_temp_file_removed_when_stream_fails(self, mock_git_client):
        stream = MagicMock()
        stream.read.side_effect = OSError("read failed")
        created = []

        from tfsbridge.infra import temp_file as temp_file_module
        real_mkstemp = temp_file_module.tempfile.mkstemp

        def mkstemp(*args, **kwargs):
            fd, name = real_mkstemp(*args, **kwargs)
            created.append(Path(name))
            return fd, name

        with patch.object(temp_file_module.tempfile, 'mkstemp', side_effect=mkstemp):
            with pytest.raises(OSError):
                ObjectService(mock_git_client).insert_bytes(stream)

        mock_git_client.run.assert_not_called()
        assert created and not created[0].exists()


def test_read_object(mock_git_client):
    mock_git_client.run_bytes.return_value = b"content"
    assert ObjectService(mock_git_client).read_object(NEW_BLOB) == b"content"
    mock_git_client.run_bytes.assert_called_once_with("cat-file", "-p", NEW_BLOB)
