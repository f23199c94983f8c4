"""
Line grammars for the text tfsbridge reads from git.

Each line shape is a single compiled pattern with named groups and a
typed result. Parse functions are pure: they return None when a line
does not have the expected shape and never raise.

Shapes:
    config line      tfs-remote.<id>.<key>=<value>     (git config -l)
    commit header    commit <sha>                      (git log --pretty=medium)
    changeset footer git-tfs-id: url=<U>; repository=<P>; changeset=<N>
    tree entry       <mode> <type> <sha>\\t<path>\\0     (git ls-tree -z)
"""

import re
from typing import NamedTuple, Optional

DEFAULT_NAMESPACE = "tfs-remote"

SHA1 = r"[0-9a-f]{40}"
SHA1_RE = re.compile(rf"^{SHA1}$")

FOOTER_TAG = "git-tfs-id:"

_COMMIT_HEADER_RE = re.compile(rf"^commit (?P<sha>{SHA1})\b")
_CHANGESET_FOOTER_RE = re.compile(
    rf"^\s*{re.escape(FOOTER_TAG)}\s+"
    r"url=(?P<url>[^;]+);\s*"
    r"repository=(?P<repository>[^;]+);\s*"
    r"changeset=(?P<changeset>\d+)\s*$"
)
_CONFIG_LINE_CACHE = {}


class ConfigLine(NamedTuple):
    remote_id: str
    key: str
    value: str


class CommitHeader(NamedTuple):
    sha: str


class ChangesetFooter(NamedTuple):
    url: str
    repository: str
    changeset: int


class TreeEntry(NamedTuple):
    mode: str
    object_type: str
    sha: str
    path: str


def is_sha1(value: Optional[str]) -> bool:
    """True when value is a full lowercase hex SHA-1."""
    return bool(value) and SHA1_RE.match(value) is not None


def _config_line_re(namespace: str) -> "re.Pattern[str]":
    pattern = _CONFIG_LINE_CACHE.get(namespace)
    if pattern is None:
        pattern = re.compile(
            rf"^{re.escape(namespace)}\.(?P<remote_id>[^.]+)\.(?P<key>[^.=]+)=(?P<value>.*)$"
        )
        _CONFIG_LINE_CACHE[namespace] = pattern
    return pattern


def parse_config_line(line: str, namespace: str = DEFAULT_NAMESPACE) -> Optional[ConfigLine]:
    """
    Parse one line of ``git config -l`` output.

    Args:
        line: Raw output line (a trailing newline is ignored)
        namespace: Config section holding the remotes

    Returns:
        ConfigLine, or None for lines outside the namespace
    """
    match = _config_line_re(namespace).match(line.rstrip("\r\n"))
    if not match:
        return None
    return ConfigLine(match.group("remote_id"), match.group("key"), match.group("value"))


def parse_commit_header(line: str) -> Optional[CommitHeader]:
    """Parse a ``commit <sha>`` header; decorations after the sha are allowed."""
    match = _COMMIT_HEADER_RE.match(line)
    if not match:
        return None
    return CommitHeader(match.group("sha"))


def parse_changeset_footer(line: str) -> Optional[ChangesetFooter]:
    """
    Parse a ``git-tfs-id:`` footer line from a commit message.

    Leading whitespace is allowed, since ``git log --pretty=medium``
    indents message bodies by four spaces. A changeset mentioned in
    prose without the tag is not a footer.
    """
    match = _CHANGESET_FOOTER_RE.match(line.rstrip("\r\n"))
    if not match:
        return None
    return ChangesetFooter(
        url=match.group("url").strip(),
        repository=match.group("repository").strip(),
        changeset=int(match.group("changeset")),
    )


def format_changeset_footer(url: str, repository: str, changeset: int) -> str:
    """Render the footer line that parse_changeset_footer reads back."""
    return f"{FOOTER_TAG} url={url}; repository={repository}; changeset={changeset}"


def parse_tree_entry(listing: str, path: str) -> Optional[TreeEntry]:
    """
    Parse ``git ls-tree -z`` output for a single expected path.

    The entry must be the first one in the listing and its path must
    equal ``path`` exactly.
    """
    if not listing:
        return None
    pattern = re.compile(
        rf"\A(?P<mode>\d{{6}}) (?P<type>blob|tree) (?P<sha>{SHA1})\t{re.escape(path)}\0"
    )
    match = pattern.match(listing)
    if not match:
        return None
    return TreeEntry(
        mode=match.group("mode"),
        object_type=match.group("type"),
        sha=match.group("sha"),
        path=path,
    )
