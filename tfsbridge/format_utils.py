"""
Output format utilities for tfsbridge CLI commands.

Provides functions to format data as JSON Lines, JSON and YAML.
"""

import json
import os
from typing import Dict, Any, Iterable, Iterator

import yaml

FORMATS = ('jsonl', 'json', 'yaml')


def format_output(data: Iterable[Dict[str, Any]], format: str) -> Iterator[str]:
    """
    Format data according to the specified format.

    Args:
        data: Dictionaries to format
        format: Output format (jsonl, json, yaml)

    Yields:
        Formatted strings for output
    """
    if format == "jsonl":
        yield from format_jsonl(data)
    elif format == "json":
        yield from format_json(data)
    elif format == "yaml":
        yield from format_yaml(data)
    else:
        raise ValueError(f"Unknown format: {format}")


def format_jsonl(data: Iterable[Dict[str, Any]]) -> Iterator[str]:
    """Format data as JSON Lines (one JSON object per line)."""
    for item in data:
        yield json.dumps(item, ensure_ascii=False)


def format_json(data: Iterable[Dict[str, Any]]) -> Iterator[str]:
    """Format data as a single JSON array."""
    yield json.dumps(list(data), ensure_ascii=False, indent=2)


def format_yaml(data: Iterable[Dict[str, Any]]) -> Iterator[str]:
    """Format data as a YAML list."""
    yield yaml.safe_dump(list(data), default_flow_style=False, allow_unicode=True, sort_keys=False).rstrip('\n')


def get_format_from_env(default: str = 'jsonl') -> str:
    """
    Get output format from the TFSBRIDGE_FORMAT environment variable.

    Unknown values fall back to ``default``.
    """
    format = os.environ.get('TFSBRIDGE_FORMAT', default).lower()
    if format not in FORMATS:
        return default
    return format
