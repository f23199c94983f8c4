"""
Rendering functions for tfsbridge output.

This module handles all pretty-printing and table formatting.
Services return domain objects, this module makes them human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import List, Optional

from .domain import HeadLookup, HeadStatus, ObjectRef, RemoteDescriptor

console = Console()
err_console = Console(stderr=True)


def render_table(headers: List[str], rows: List[List[str]], title: Optional[str] = None) -> None:
    """
    Render a generic table with the given headers and rows.

    Args:
        headers: List of column headers
        rows: List of rows, where each row is a list of values
        title: Optional table title
    """
    if not rows:
        console.print("[yellow]No data to display.[/yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*["" if val is None else str(val) for val in row])

    console.print(table)


def render_remotes_table(remotes: List[RemoteDescriptor]) -> None:
    """Render tfs remotes as a table."""
    if not remotes:
        console.print("[yellow]No tfs remotes configured.[/yellow]")
        return
    render_table(
        ["Id", "Url", "Repository", "Username"],
        [[r.id, r.url, r.repository_path, r.username] for r in remotes],
        title="TFS remotes"
    )


def render_head_lookup(lookup: HeadLookup, local_commits: Optional[List[str]] = None) -> None:
    """Render the changeset found below a head."""
    if lookup.status is HeadStatus.NO_SUCH_HEAD:
        console.print(f"[red]No head named {lookup.head}[/red]")
        return
    if lookup.info is None:
        console.print(f"[yellow]No changeset found below {lookup.head}[/yellow]")
    else:
        info = lookup.info
        console.print(
            f"[bold]{lookup.head}[/bold] is based on changeset "
            f"[green]C{info.changeset_id}[/green] at [cyan]{info.commit}[/cyan]"
        )
        console.print(f"  remote [bold]{info.remote.id}[/bold]: {info.remote.url} {info.remote.repository_path}")
    if local_commits:
        console.print(f"{len(local_commits)} local commit(s):")
        for commit in local_commits:
            console.print(f"  {commit}")


def render_object_ref(ref: ObjectRef) -> None:
    render_table(
        ["Mode", "Type", "Sha", "Path"],
        [[ref.mode, ref.object_type, ref.sha, ref.path]],
        title=f"Object at {ref.commit}"
    )
