"""
History service for tfsbridge.

Finds the nearest first-parent ancestor of a head whose commit message
carries a changeset footer, collecting the commits in between.
"""

import logging
from typing import Callable, Iterable, List, Optional

from ..domain.changeset import ChangesetInfo, HeadLookup
from ..domain.remote import RemoteDescriptor
from ..infra.git_client import GitClient, GitCommandError
from ..parsing import parse_changeset_footer, parse_commit_header
from .remote_service import RemoteService

logger = logging.getLogger(__name__)

RemoteResolver = Callable[[str, str], RemoteDescriptor]


def scan_first_changeset(
    lines: Iterable[str],
    resolve_remote: RemoteResolver,
    local_commits: Optional[List[str]] = None
) -> Optional[ChangesetInfo]:
    """
    Scan ``git log --pretty=medium`` output for the first changeset footer.

    Commits seen before the match are appended to ``local_commits`` in
    the order they appear (head first). The matching commit is not
    appended. When no commit matches, every commit seen is appended.

    Args:
        lines: Log output, newest commit first
        resolve_remote: Maps (url, repository path) to a remote
        local_commits: Receives commits without a footer

    Returns:
        ChangesetInfo for the first footer found, or None

    Raises:
        RemoteNotFoundError: If a footer names an unconfigured remote
    """
    if local_commits is None:
        local_commits = []
    current_commit = None
    for line in lines:
        header = parse_commit_header(line)
        if header:
            if current_commit is not None:
                local_commits.append(current_commit)
            current_commit = header.sha
            continue
        if current_commit is None:
            continue
        footer = parse_changeset_footer(line)
        if footer:
            return ChangesetInfo(
                remote=resolve_remote(footer.url, footer.repository),
                changeset_id=footer.changeset,
                commit=current_commit,
            )
    if current_commit is not None:
        local_commits.append(current_commit)
    return None


class HistoryService:
    """
    Service for relating local history to remote changesets.

    Example:
        service = HistoryService(git_client, remote_service)
        local = []
        info = service.working_head_info("HEAD", local)
        if info:
            print(f"C{info.changeset_id} plus {len(local)} local commit(s)")
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        remote_service: Optional[RemoteService] = None
    ):
        self.git = git_client or GitClient()
        self.remotes = remote_service or RemoteService(self.git)

    def resolve_head(self, head: str = "HEAD", local_commits: Optional[List[str]] = None) -> HeadLookup:
        """
        Walk first-parent history from ``head`` to its nearest changeset.

        A failing git command (typically because ``head`` does not exist)
        is reported as HeadStatus.NO_SUCH_HEAD rather than raised.
        """
        if local_commits is None:
            local_commits = []
        try:
            info = self.git.pipe(
                ["log", "--no-color", "--first-parent", "--no-abbrev-commit", "--pretty=medium", head],
                lambda lines: scan_first_changeset(
                    lines, self.remotes.read_remote_by_url, local_commits
                )
            )
        except GitCommandError as e:
            logger.debug(f"No head named {head} was found: {e}")
            return HeadLookup.no_such_head(head)
        return HeadLookup.of(head, info)

    def working_head_info(self, head: str = "HEAD", local_commits: Optional[List[str]] = None) -> Optional[ChangesetInfo]:
        """Changeset info for ``head``, or None when there is none."""
        return self.resolve_head(head, local_commits).info
