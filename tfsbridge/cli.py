#!/usr/bin/env python3

import click

from tfsbridge.config import configure_logging, load_config
from tfsbridge.exit_codes import ConfigError
from tfsbridge.format_utils import FORMATS, get_format_from_env
from tfsbridge.commands.remotes import remotes_cmd, remote_cmd
from tfsbridge.commands.history import head_info_cmd
from tfsbridge.commands.objects import ls_object_cmd, hash_object_cmd, cat_object_cmd


@click.group()
@click.version_option(package_name='tfsbridge')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), help='Config file (default: ~/.tfsbridge/config.json)')
@click.option('--git-dir', help='Repository directory (sets GIT_DIR)')
@click.option('-C', '--work-tree', help='Working copy to run git in')
@click.option('--subdir', help='Subdirectory of the working copy to run git in')
@click.option('--namespace', help='git config section holding tfs remotes (default: tfs-remote)')
@click.option('-f', '--format', 'output_format', type=click.Choice(FORMATS), help='Output format (default: jsonl, or from TFSBRIDGE_FORMAT env)')
@click.option('-v', '--verbose', is_flag=True, help='Log git commands and diagnostics to stderr')
@click.pass_context
def cli(ctx, config_path, git_dir, work_tree, subdir, namespace, output_format, verbose):
    """tfsbridge - Link a git working copy to TFS changesets.

    Reads the tfs remotes recorded in git config, finds the changeset a
    branch is based on, and reads or writes objects in git's object store.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(e.exit_code)

    git_config = config.setdefault('git', {})
    if git_dir:
        git_config['dir'] = git_dir
    if work_tree:
        git_config['work_tree'] = work_tree
    if subdir:
        git_config['subdir'] = subdir
    if namespace:
        config.setdefault('remotes', {})['namespace'] = namespace

    configure_logging(config, verbose=verbose)

    ctx.obj = {
        'config': config,
        'format': output_format or get_format_from_env(config.get('output', {}).get('format') or 'jsonl'),
    }


cli.add_command(remotes_cmd)
cli.add_command(remote_cmd)
cli.add_command(head_info_cmd)
cli.add_command(ls_object_cmd)
cli.add_command(hash_object_cmd)
cli.add_command(cat_object_cmd)


def main():
    cli()


if __name__ == "__main__":
    main()
