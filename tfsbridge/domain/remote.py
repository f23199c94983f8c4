"""
Remote descriptor domain object for tfsbridge.

A RemoteDescriptor is one named link from the local repository to a
path in a remote TFS system, as recorded under ``tfs-remote.<id>.*``
in git config.
"""

from dataclasses import dataclass, replace
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class RemoteDescriptor:
    """A named tfs remote read from git config."""
    id: str
    url: Optional[str] = None
    username: Optional[str] = None
    repository_path: Optional[str] = None

    def with_setting(self, key: str, value: str) -> 'RemoteDescriptor':
        """
        Return a copy with one config key applied.

        Only ``url``, ``username`` and ``repository`` are modelled; any
        other key (``fetch`` included) returns self unchanged.
        """
        if key == 'url':
            return replace(self, url=value)
        if key == 'username':
            return replace(self, username=value)
        if key == 'repository':
            return replace(self, repository_path=value)
        return self

    def matches(self, url: str, repository_path: str) -> bool:
        return self.url == url and self.repository_path == repository_path

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'url': self.url,
            'username': self.username,
            'repository_path': self.repository_path,
        }
