"""
Handles the object commands: 'ls-object', 'hash-object' and 'cat-object'.
"""

import click

from ..cli_utils import get_repository, standard_command, use_table
from ..exit_codes import ObjectNotFoundError
from ..render import render_object_ref


@click.command(name='ls-object')
@click.argument('commit')
@click.argument('path')
@click.option('--table/--no-table', default=None, help='Display as formatted table (auto-detected by default)')
@standard_command
def ls_object_cmd(commit, path, table):
    """Show the blob or tree at PATH in COMMIT.

    \b
    Examples:
        tfsbridge ls-object HEAD README.md
        tfsbridge ls-object 1a2b3c src
    """
    ref = get_repository().get_object_info(commit, path)
    if ref is None:
        raise ObjectNotFoundError(f"No object at {path} in {commit}")
    if use_table(table):
        render_object_ref(ref)
        return None
    return ref


@click.command(name='hash-object')
@click.argument('source', type=click.File('rb'))
@standard_command
def hash_object_cmd(source):
    """Write SOURCE as a blob and print its sha.

    SOURCE: File to insert, or - for stdin

    \b
    Examples:
        tfsbridge hash-object notes.txt
        echo hello | tfsbridge hash-object -
    """
    sha = get_repository().hash_and_insert_object(source)
    return {'sha': sha}


@click.command(name='cat-object')
@click.argument('sha')
@standard_command
def cat_object_cmd(sha):
    """Write the raw content of blob SHA to stdout."""
    content = get_repository().read_object(sha)
    with click.open_file('-', 'wb') as stdout:
        stdout.write(content)
        stdout.flush()
    return None
