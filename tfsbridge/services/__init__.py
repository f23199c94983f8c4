"""
Service layer for tfsbridge.

Contains the logic that orchestrates domain objects and infrastructure:
- RemoteService: tfs remotes from git config
- HistoryService: Changeset info for a head
- ObjectService: Object lookup and insertion

Services are the primary API for commands to use.
"""

from .remote_service import RemoteService
from .history_service import HistoryService, scan_first_changeset
from .object_service import ObjectService

__all__ = [
    'RemoteService',
    'HistoryService',
    'scan_first_changeset',
    'ObjectService',
]
