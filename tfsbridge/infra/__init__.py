"""
Infrastructure layer for tfsbridge.

Contains abstractions for external systems:
- GitClient: Git command execution (captured or streamed output)
- scoped_temp_file: Temporary files deleted on scope exit

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient, GitCommandError
from .temp_file import scoped_temp_file

__all__ = [
    'GitClient',
    'GitCommandError',
    'scoped_temp_file',
]
