"""
tfsbridge - Link a local git working copy to remote TFS changesets.

tfsbridge reads the tfs remotes recorded in git config, finds the
changeset a branch was last synchronised at, and moves content in and
out of git's object store.

Quick Start:
    import tfsbridge

    repo = tfsbridge.TfsRepository(work_tree="~/src/project")

    # Remotes (tfs-remote.<id>.url / .username / .repository)
    for remote in repo.read_all_remotes():
        print(remote.id, remote.url, remote.repository_path)

    remote = repo.read_remote("default")

    # Nearest changeset on the first-parent line of HEAD
    local = []
    info = repo.working_head_info("HEAD", local)
    if info:
        print(f"C{info.changeset_id} on {info.remote.id}, {len(local)} local commit(s)")

    # Objects
    ref = repo.get_object_info("HEAD", "README.md")
    sha = repo.hash_and_insert_object(b"content\\n")

Domain Objects:
    RemoteDescriptor - A named link to a path in a TFS system
    ChangesetInfo - A commit tied to a remote changeset
    HeadLookup - Found / no changeset / no such head
    ObjectRef - A blob or tree at a path in a commit

Services:
    RemoteService - Remote registry from git config
    HistoryService - Changeset info for a head
    ObjectService - Object lookup and insertion
"""

__version__ = "0.3.0"

# High-level API
from .api import TfsRepository

# Domain objects
from .domain import (
    RemoteDescriptor,
    RemoteRegistry,
    ChangesetInfo,
    HeadLookup,
    HeadStatus,
    ObjectRef,
)

# Services (for advanced use)
from .services import (
    RemoteService,
    HistoryService,
    ObjectService,
)

# Infrastructure
from .infra import GitClient, GitCommandError

# Errors
from .exit_codes import RemoteNotFoundError, ConfigError

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # High-level API
    "TfsRepository",
    # Domain objects
    "RemoteDescriptor",
    "RemoteRegistry",
    "ChangesetInfo",
    "HeadLookup",
    "HeadStatus",
    "ObjectRef",
    # Services
    "RemoteService",
    "HistoryService",
    "ObjectService",
    # Infrastructure
    "GitClient",
    "GitCommandError",
    # Errors
    "RemoteNotFoundError",
    "ConfigError",
    # Configuration
    "load_config",
    "save_config",
]
