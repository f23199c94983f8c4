"""
Domain layer for tfsbridge.

Contains pure domain objects with no I/O or side effects:
- RemoteDescriptor: A named link to a path in a TFS system
- RemoteRegistry: All remotes read from one git config scan
- ChangesetInfo: A commit tied to a remote changeset
- HeadLookup: Outcome of searching a head's history for a changeset
- ObjectRef: A blob or tree located in a commit

These objects are immutable and provide to_dict() for JSONL output.
"""

from .remote import RemoteDescriptor
from .registry import RemoteRegistry, fold_config_line
from .changeset import ChangesetInfo, HeadLookup, HeadStatus
from .git_object import ObjectRef

__all__ = [
    'RemoteDescriptor',
    'RemoteRegistry',
    'fold_config_line',
    'ChangesetInfo',
    'HeadLookup',
    'HeadStatus',
    'ObjectRef',
]
