"""
Remote service for tfsbridge.

Reads the tfs remotes recorded in git config. Every call runs
``git config -l`` afresh; nothing is cached between calls.
"""

import logging
from typing import List, Optional

from ..domain.registry import RemoteRegistry
from ..domain.remote import RemoteDescriptor
from ..infra.git_client import GitClient
from ..parsing import DEFAULT_NAMESPACE

logger = logging.getLogger(__name__)


class RemoteService:
    """
    Service for reading tfs remotes from git config.

    Example:
        service = RemoteService(GitClient(work_tree="/path/to/repo"))
        for remote in service.read_all_remotes():
            print(remote.id, remote.url)

        remote = service.read_remote("default")
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        namespace: str = DEFAULT_NAMESPACE
    ):
        self.git = git_client or GitClient()
        self.namespace = namespace

    def read_registry(self) -> RemoteRegistry:
        """
        Scan git config once and fold it into a registry.

        Raises:
            GitCommandError: If ``git config -l`` fails
        """
        registry = self.git.pipe(
            ["config", "-l"],
            lambda lines: RemoteRegistry.from_lines(lines, self.namespace)
        )
        logger.debug(f"Read {len(registry)} tfs remote(s) from git config")
        return registry

    def read_all_remotes(self) -> List[RemoteDescriptor]:
        return self.read_registry().all()

    def read_remote(self, remote_id: str) -> RemoteDescriptor:
        """
        Read a single remote by id.

        Raises:
            RemoteNotFoundError: If the id is not configured
        """
        return self.read_registry().get(remote_id)

    def read_remote_by_url(self, url: str, repository_path: str) -> RemoteDescriptor:
        """
        Read the first remote tracking ``repository_path`` on ``url``.

        Raises:
            RemoteNotFoundError: If no remote matches both values
        """
        return self.read_registry().find(url, repository_path)
