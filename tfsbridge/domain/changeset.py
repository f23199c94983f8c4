"""
Changeset domain objects for tfsbridge.

ChangesetInfo ties a local commit to the remote changeset it was
created from. HeadLookup is the outcome of searching history for one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any

from ..parsing import is_sha1
from .remote import RemoteDescriptor


@dataclass(frozen=True)
class ChangesetInfo:
    """A local commit carrying a reference to a remote changeset."""
    remote: RemoteDescriptor
    changeset_id: int
    commit: str

    def __post_init__(self):
        if not is_sha1(self.commit):
            raise ValueError(f"Not a commit sha: {self.commit!r}")
        if self.changeset_id < 0:
            raise ValueError(f"Changeset id must be non-negative, got {self.changeset_id}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'remote': self.remote.to_dict(),
            'changeset_id': self.changeset_id,
            'commit': self.commit,
        }


class HeadStatus(Enum):
    """How a search for a head's changeset ended."""
    FOUND = "found"
    NO_CHANGESET = "no_changeset"
    NO_SUCH_HEAD = "no_such_head"


@dataclass(frozen=True)
class HeadLookup:
    """Result of walking first-parent history from a head."""
    head: str
    status: HeadStatus
    info: Optional[ChangesetInfo] = None

    @property
    def found(self) -> bool:
        return self.status is HeadStatus.FOUND

    @classmethod
    def of(cls, head: str, info: Optional[ChangesetInfo]) -> 'HeadLookup':
        if info is None:
            return cls(head=head, status=HeadStatus.NO_CHANGESET)
        return cls(head=head, status=HeadStatus.FOUND, info=info)

    @classmethod
    def no_such_head(cls, head: str) -> 'HeadLookup':
        return cls(head=head, status=HeadStatus.NO_SUCH_HEAD)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'head': self.head, 'status': self.status.value}
        if self.info is not None:
            result.update(self.info.to_dict())
        return result
