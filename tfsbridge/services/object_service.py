"""
Object service for tfsbridge.

Bridges raw content and git's object store: locate the blob or tree at
a path in a commit, and write new blobs.
"""

import logging
import shutil
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..domain.git_object import ObjectRef
from ..infra.git_client import GitClient
from ..infra.temp_file import scoped_temp_file
from ..parsing import parse_tree_entry

logger = logging.getLogger(__name__)


class ObjectService:
    """
    Service for reading and writing git objects.

    Example:
        service = ObjectService(GitClient(work_tree="/path/to/repo"))
        ref = service.lookup("HEAD", "README.md")
        sha = service.insert_bytes(b"hello\\n")
    """

    def __init__(self, git_client: Optional[GitClient] = None):
        self.git = git_client or GitClient()

    def lookup(self, commit: Optional[str], path: Optional[str]) -> Optional[ObjectRef]:
        """
        Locate the object at ``path`` in ``commit``.

        Returns None without running git when either argument is None,
        and None when the path does not exist in that commit.
        """
        if commit is None or path is None:
            return None
        listing = self.git.run("ls-tree", "-z", commit, "./" + path)
        entry = parse_tree_entry(listing, path)
        if entry is None:
            logger.debug(f"No object at {path} in {commit}")
            return None
        return ObjectRef(
            mode=entry.mode,
            sha=entry.sha,
            object_type=entry.object_type,
            path=path,
            commit=commit,
        )

    def insert_bytes(self, content: Union[bytes, BinaryIO]) -> str:
        """
        Write content as a new blob and return its sha.

        The content goes through a temporary file so git applies its own
        line-ending and encoding handling. The file is always removed.
        """
        with scoped_temp_file() as temp_path:
            with open(temp_path, 'wb') as out:
                if isinstance(content, (bytes, bytearray, memoryview)):
                    out.write(content)
                else:
                    shutil.copyfileobj(content, out)
            return self.insert_file(temp_path)

    def insert_file(self, path: Union[str, Path]) -> str:
        """
        Write a file's content as a new blob and return its sha.

        Raises:
            GitCommandError: If ``git hash-object`` fails
            ValueError: If git prints no hash
        """
        output = self.git.run("hash-object", "-w", str(path))
        lines = output.splitlines()
        new_hash = lines[0].strip() if lines else ''
        if not new_hash:
            raise ValueError(f"git hash-object printed no hash for {path}")
        return new_hash

    def read_object(self, sha: str) -> bytes:
        """Return the raw content of a blob."""
        return self.git.run_bytes("cat-file", "-p", sha)
