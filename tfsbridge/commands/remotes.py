"""
Handles the 'remotes' and 'remote' commands.

Both read the tfs remotes recorded in git config:
- remotes: list all of them
- remote: show one, by id or by url and repository path
"""

import click

from ..cli_utils import get_repository, standard_command, use_table
from ..render import render_remotes_table, render_table


@click.command(name='remotes')
@click.option('--table/--no-table', default=None, help='Display as formatted table (auto-detected by default)')
@standard_command
def remotes_cmd(table):
    """List the tfs remotes configured in this repository.

    \b
    Examples:
        tfsbridge remotes
        tfsbridge remotes --table
        tfsbridge -f yaml remotes
    """
    remotes = get_repository().read_all_remotes()
    if use_table(table):
        render_remotes_table(remotes)
        return None
    return remotes


@click.command(name='remote')
@click.argument('remote_id', required=False)
@click.option('--url', help='TFS server url of the remote')
@click.option('--repository', 'repository_path', help='TFS repository path of the remote')
@click.option('--table/--no-table', default=None, help='Display as formatted table (auto-detected by default)')
@standard_command
def remote_cmd(remote_id, url, repository_path, table):
    """Show one tfs remote.

    REMOTE_ID: Remote id (the <id> in tfs-remote.<id>.url)

    \b
    Examples:
        tfsbridge remote default
        tfsbridge remote --url http://tfs:8080/tfs --repository '$/Project/Trunk'
    """
    if remote_id and (url or repository_path):
        raise click.UsageError("Give either REMOTE_ID or --url/--repository, not both")
    repo = get_repository()
    if remote_id:
        remote = repo.read_remote(remote_id)
    elif url and repository_path:
        remote = repo.read_remote_by_url(url, repository_path)
    else:
        raise click.UsageError("Give REMOTE_ID, or both --url and --repository")

    if use_table(table):
        render_table(
            ["Field", "Value"],
            [[key, value] for key, value in remote.to_dict().items()],
            title=f"Remote {remote.id}"
        )
        return None
    return remote
