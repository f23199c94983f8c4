"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
import click
from functools import wraps
from typing import Any, Dict, Generator

from rich.markup import escape

from .api import TfsRepository
from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError
)
from .format_utils import format_output, get_format_from_env
from .render import err_console


def _settings() -> Dict[str, Any]:
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return {}
    return ctx.find_object(dict) or {}


def get_repository() -> TfsRepository:
    """Build the repository for the current command from the group's config."""
    return TfsRepository.from_config(_settings().get('config'))


def _to_item(item: Any) -> Any:
    return item.to_dict() if hasattr(item, 'to_dict') else item


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Domain objects and dicts returned by the command are written to
      stdout in the selected format (jsonl by default)
    - A None result means the command did its own output
    - Errors go to stderr, with a JSON error object on stdout, and set
      the exit code
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        output_format = _settings().get('format') or get_format_from_env('jsonl')

        try:
            result = func(*args, **kwargs)

            if result is not None:
                if isinstance(result, (Generator, list, tuple)):
                    items = (_to_item(item) for item in result)
                else:
                    items = iter([_to_item(result)])
                for line in format_output(items, output_format):
                    click.echo(line)

            sys.exit(SUCCESS)

        except KeyboardInterrupt:
            err_console.print("[red]Interrupted by user[/red]")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            raise
        except CommandError as e:
            err_console.print(f"[red]ERROR:[/red] {escape(str(e))}", highlight=False)
            error_obj = {
                "error": str(e),
                "type": type(e).__name__,
                "exit_code": e.exit_code
            }
            click.echo(json.dumps(error_obj, ensure_ascii=False))
            sys.exit(e.exit_code)
        except Exception as e:
            err_console.print(f"[red]ERROR:[/red] Command failed: {escape(str(e))}", highlight=False)
            error_obj = {
                "error": str(e),
                "type": type(e).__name__
            }
            click.echo(json.dumps(error_obj, ensure_ascii=False))
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def use_table(table) -> bool:
    """Resolve a --table/--no-table flag; None means table on a terminal."""
    if table is None:
        return sys.stdout.isatty()
    return table
