"""
Remote registry for tfsbridge.

The registry is rebuilt from ``git config -l`` output on every read.
Building it is a pure fold over config lines:

    registry = RemoteRegistry.from_lines(lines)

so it can be tested by feeding canned lines without running git.
"""

from dataclasses import dataclass, field
from functools import reduce
from types import MappingProxyType
from typing import Iterable, List, Mapping

from ..exit_codes import RemoteNotFoundError
from ..parsing import DEFAULT_NAMESPACE, parse_config_line
from .remote import RemoteDescriptor


def fold_config_line(
    remotes: Mapping[str, RemoteDescriptor],
    line: str,
    namespace: str = DEFAULT_NAMESPACE
) -> Mapping[str, RemoteDescriptor]:
    """
    Apply one config line to a remote mapping.

    Lines outside the namespace leave the mapping untouched. A matching
    line creates the remote on first sighting and otherwise replaces it
    with the updated value, so the last assignment to a key wins.
    """
    parsed = parse_config_line(line, namespace)
    if parsed is None:
        return remotes
    current = remotes.get(parsed.remote_id) or RemoteDescriptor(id=parsed.remote_id)
    updated = dict(remotes)
    updated[parsed.remote_id] = current.with_setting(parsed.key, parsed.value)
    return updated


@dataclass(frozen=True)
class RemoteRegistry:
    """Immutable id -> RemoteDescriptor mapping, in first-seen order."""
    remotes: Mapping[str, RemoteDescriptor] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'remotes', MappingProxyType(dict(self.remotes)))

    @classmethod
    def from_lines(cls, lines: Iterable[str], namespace: str = DEFAULT_NAMESPACE) -> 'RemoteRegistry':
        remotes = reduce(
            lambda acc, line: fold_config_line(acc, line, namespace),
            lines,
            {},
        )
        return cls(remotes)

    def __len__(self) -> int:
        return len(self.remotes)

    def __contains__(self, remote_id: object) -> bool:
        return remote_id in self.remotes

    def all(self) -> List[RemoteDescriptor]:
        return list(self.remotes.values())

    def get(self, remote_id: str) -> RemoteDescriptor:
        """
        Look up a remote by id.

        Raises:
            RemoteNotFoundError: If no remote has this id
        """
        try:
            return self.remotes[remote_id]
        except KeyError as e:
            raise RemoteNotFoundError(
                f"Unable to locate tfs remote with id = {remote_id}"
            ) from e

    def find(self, url: str, repository_path: str) -> RemoteDescriptor:
        """
        Return the first remote whose url and repository path both match.

        Raises:
            RemoteNotFoundError: If no remote matches
        """
        for remote in self.remotes.values():
            if remote.matches(url, repository_path):
                return remote
        raise RemoteNotFoundError(
            f"Unable to locate tfs remote with url = {url}, repo = {repository_path}"
        )
