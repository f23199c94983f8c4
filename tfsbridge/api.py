"""
High-level Python API for tfsbridge.

Example:
    import tfsbridge

    # Repository in the current directory, config defaults
    repo = tfsbridge.TfsRepository()

    # Or with an explicit location
    repo = tfsbridge.TfsRepository(work_tree="~/src/project")

    # Remotes recorded in git config
    for remote in repo.read_all_remotes():
        print(remote.id, remote.url, remote.repository_path)

    # Nearest changeset below HEAD, plus the local commits on top of it
    local = []
    info = repo.working_head_info("HEAD", local)

    # Objects
    ref = repo.get_object_info("HEAD", "README.md")
    sha = repo.hash_and_insert_object(b"new content\\n")

    # Low-level access to services
    repo.remote_service
    repo.history_service
    repo.object_service
"""

from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

from .config import load_config
from .domain import ChangesetInfo, HeadLookup, ObjectRef, RemoteDescriptor
from .infra import GitClient
from .parsing import DEFAULT_NAMESPACE
from .services import HistoryService, ObjectService, RemoteService


class TfsRepository:
    """
    A git working copy and its links to TFS.

    Groups remote, history and object operations over one GitClient.
    """

    def __init__(
        self,
        git_dir: Optional[str] = None,
        work_tree: Optional[str] = None,
        subdir: Optional[str] = None,
        namespace: str = DEFAULT_NAMESPACE,
        git_client: Optional[GitClient] = None
    ):
        """
        Initialize TfsRepository.

        Args:
            git_dir: Repository directory (GIT_DIR)
            work_tree: Working copy path
            subdir: Subdirectory of the working copy to run git in
            namespace: git config section holding tfs remotes
            git_client: Pre-built client (overrides the path arguments)
        """
        self._git = git_client or GitClient(
            git_dir=Path(git_dir).expanduser() if git_dir else None,
            work_tree=Path(work_tree).expanduser() if work_tree else None,
            subdir=subdir,
        )
        self._remote_service = RemoteService(self._git, namespace=namespace)
        self._history_service = HistoryService(self._git, self._remote_service)
        self._object_service = ObjectService(self._git)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'TfsRepository':
        """Build a repository from a config dict (loads the default config if None)."""
        if config is None:
            config = load_config()
        git_config = config.get('git', {})
        timeout = git_config.get('timeout_seconds') or None
        client = GitClient(
            executable=git_config.get('executable') or 'git',
            git_dir=git_config.get('dir') or None,
            work_tree=git_config.get('work_tree') or None,
            subdir=git_config.get('subdir') or None,
            timeout=timeout,
        )
        namespace = config.get('remotes', {}).get('namespace') or DEFAULT_NAMESPACE
        return cls(namespace=namespace, git_client=client)

    @property
    def git(self) -> GitClient:
        return self._git

    @property
    def remote_service(self) -> RemoteService:
        return self._remote_service

    @property
    def history_service(self) -> HistoryService:
        return self._history_service

    @property
    def object_service(self) -> ObjectService:
        return self._object_service

    # Remotes

    def read_all_remotes(self) -> List[RemoteDescriptor]:
        return self._remote_service.read_all_remotes()

    def read_remote(self, remote_id: str) -> RemoteDescriptor:
        return self._remote_service.read_remote(remote_id)

    def read_remote_by_url(self, url: str, repository_path: str) -> RemoteDescriptor:
        return self._remote_service.read_remote_by_url(url, repository_path)

    # History

    def resolve_head(self, head: str = "HEAD", local_commits: Optional[List[str]] = None) -> HeadLookup:
        return self._history_service.resolve_head(head, local_commits)

    def working_head_info(self, head: str = "HEAD", local_commits: Optional[List[str]] = None) -> Optional[ChangesetInfo]:
        return self._history_service.working_head_info(head, local_commits)

    # Objects

    def get_object_info(self, commit: Optional[str], path: Optional[str]) -> Optional[ObjectRef]:
        return self._object_service.lookup(commit, path)

    def hash_and_insert_object(self, content: Union[bytes, BinaryIO, str, Path]) -> str:
        """Insert bytes or a binary stream, or the file at a path; returns the sha."""
        if isinstance(content, (str, Path)):
            return self._object_service.insert_file(content)
        return self._object_service.insert_bytes(content)

    def read_object(self, sha: str) -> bytes:
        return self._object_service.read_object(sha)
