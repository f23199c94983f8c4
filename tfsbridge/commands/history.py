"""
Handles the 'head-info' command.

Finds the changeset a head is based on by walking its first-parent
history for a git-tfs-id footer.
"""

import click

from ..cli_utils import get_repository, standard_command, use_table
from ..render import render_head_lookup


@click.command(name='head-info')
@click.argument('head', default='HEAD', required=False)
@click.option('--local-commits', is_flag=True, help='Also list commits made on top of the changeset')
@click.option('--table/--no-table', default=None, help='Display as formatted text (auto-detected by default)')
@standard_command
def head_info_cmd(head, local_commits, table):
    """Show the tfs changeset HEAD (or another ref) is based on.

    HEAD: Ref to start from (default: HEAD)

    \b
    Output status is one of:
        found          a changeset footer was found
        no_changeset   history has no changeset footer
        no_such_head   the ref could not be walked

    \b
    Examples:
        tfsbridge head-info
        tfsbridge head-info feature/x --local-commits
    """
    commits = []
    lookup = get_repository().resolve_head(head, commits)

    if use_table(table):
        render_head_lookup(lookup, commits if local_commits else None)
        return None

    result = lookup.to_dict()
    if local_commits:
        result['local_commits'] = commits
    return result
