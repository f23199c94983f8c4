"""
Git client infrastructure for tfsbridge.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic

Two calling styles are offered:
- run(): capture the whole of stdout once the command finishes
- pipe(): hand stdout to a handler line by line while git is running
"""

import os
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence, TypeVar, Union
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T')

PathLike = Union[str, Path]


class GitCommandError(subprocess.CalledProcessError):
    """A git command exited with a non-zero status."""

    def __str__(self) -> str:
        command = ' '.join(str(part) for part in self.cmd)
        message = f"Command '{command}' exited with status {self.returncode}"
        detail = (self.stderr or '').strip() if isinstance(self.stderr, str) else ''
        if detail:
            message += f": {detail}"
        return message


class _LineStream:
    """Iterates over a text stream without newlines and records reaching EOF."""

    def __init__(self, stream):
        self._stream = stream
        self.exhausted = False

    def __iter__(self) -> Iterator[str]:
        for line in self._stream:
            yield line.rstrip('\r\n')
        self.exhausted = True


class GitClient:
    """
    Abstraction over git commands.

    The client carries the repository location so callers only pass
    git arguments. ``git_dir`` is exported as GIT_DIR; commands run in
    ``work_tree``, or in ``work_tree/subdir`` when a subdirectory is set.

    Example:
        client = GitClient(work_tree="/path/to/repo")
        print(client.run("rev-parse", "HEAD"))

        count = client.pipe(["log", "--oneline"], lambda lines: sum(1 for _ in lines))
    """

    def __init__(
        self,
        executable: str = "git",
        git_dir: Optional[PathLike] = None,
        work_tree: Optional[PathLike] = None,
        subdir: Optional[PathLike] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize GitClient.

        Args:
            executable: git binary to invoke
            git_dir: Repository directory, exported as GIT_DIR
            work_tree: Working copy to run commands in
            subdir: Subdirectory of the working copy to run commands in
            timeout: Command timeout in seconds (None waits forever)
        """
        self.executable = executable
        self.git_dir = str(git_dir) if git_dir else None
        self.work_tree = str(work_tree) if work_tree else None
        self.subdir = str(subdir) if subdir else None
        self.timeout = timeout

    @property
    def cwd(self) -> Optional[str]:
        """Directory commands run in, or None for the current directory."""
        if self.subdir:
            return os.path.join(self.work_tree or os.getcwd(), self.subdir)
        return self.work_tree

    def _env(self) -> Dict[str, str]:
        env = os.environ.copy()
        if self.git_dir:
            env['GIT_DIR'] = self.git_dir
        return env

    def _command(self, args: Sequence[PathLike]) -> List[str]:
        return [self.executable] + [str(arg) for arg in args]

    def run(self, *args: PathLike) -> str:
        """
        Run a git command and return its stdout.

        Raises:
            GitCommandError: If git exits non-zero
        """
        cmd = self._command(args)
        logger.debug(f"Running: {' '.join(cmd)}")
        result = subprocess.run(
            cmd,
            cwd=self.cwd,
            env=self._env(),
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='replace',
            timeout=self.timeout
        )
        if result.returncode != 0:
            raise GitCommandError(result.returncode, cmd, output=result.stdout, stderr=result.stderr)
        return result.stdout

    def run_bytes(self, *args: PathLike) -> bytes:
        """Run a git command and return its raw stdout."""
        cmd = self._command(args)
        logger.debug(f"Running: {' '.join(cmd)}")
        result = subprocess.run(
            cmd,
            cwd=self.cwd,
            env=self._env(),
            capture_output=True,
            timeout=self.timeout
        )
        if result.returncode != 0:
            stderr = result.stderr.decode('utf-8', errors='replace')
            raise GitCommandError(result.returncode, cmd, output=result.stdout, stderr=stderr)
        return result.stdout

    def pipe(self, args: Sequence[PathLike], handler: Callable[[Iterator[str]], T]) -> T:
        """
        Run a git command, feeding its stdout to ``handler`` line by line.

        The handler gets an iterator of lines (newlines stripped) and may
        stop early. If it returns before the output is exhausted the
        process is killed and its exit status is not checked. Otherwise
        a non-zero exit raises after the handler has seen every line.

        stderr goes to a temporary file so a chatty command cannot block
        on a full pipe. ``timeout`` bounds the wait for exit once stdout
        is closed; the process is killed when it runs out.

        Args:
            args: git arguments
            handler: Consumer of the output lines

        Returns:
            Whatever the handler returns

        Raises:
            GitCommandError: If git exits non-zero after full output
            subprocess.TimeoutExpired: If git does not exit in time
        """
        cmd = self._command(args)
        logger.debug(f"Piping: {' '.join(cmd)}")
        with tempfile.TemporaryFile() as stderr_file, subprocess.Popen(
            cmd,
            cwd=self.cwd,
            env=self._env(),
            stdout=subprocess.PIPE,
            stderr=stderr_file,
            text=True,
            encoding='utf-8',
            errors='replace'
        ) as process:
            lines = _LineStream(process.stdout)
            try:
                result = handler(iter(lines))
            except BaseException:
                process.kill()
                raise

            if not lines.exhausted:
                logger.debug(f"Abandoning output of: {' '.join(cmd)}")
                process.kill()
                process.wait()
                return result

            try:
                returncode = process.wait(timeout=self.timeout)
            except subprocess.TimeoutExpired:
                logger.debug(f"Timed out waiting for: {' '.join(cmd)}")
                process.kill()
                raise
            if returncode != 0:
                stderr_file.seek(0)
                stderr = stderr_file.read().decode('utf-8', errors='replace')
                raise GitCommandError(returncode, cmd, stderr=stderr)
            return result
