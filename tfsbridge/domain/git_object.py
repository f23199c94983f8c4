"""
Git object reference for tfsbridge.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class ObjectRef:
    """A blob or tree found at a path within a commit's tree."""
    mode: str
    sha: str
    object_type: str
    path: str
    commit: str

    @property
    def is_tree(self) -> bool:
        return self.object_type == 'tree'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mode': self.mode,
            'sha': self.sha,
            'object_type': self.object_type,
            'path': self.path,
            'commit': self.commit,
        }
