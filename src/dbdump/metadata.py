#!/usr/bin/env python3
from __future__ import annotations

"""mydumper metadata file helpers.

The metadata file is a list of `[group]` header lines, each followed by the raw
lines of that group. Lines starting with `#` are comments.

Two dump runs (data, then structure only with --dirty) each rewrite the file,
so the orchestrator parses both and writes back the merged result.
"""

from typing import Dict, List

from .errors import MetadataFormatError

# Only meaningful for the run that captured the session.
PRIMARY_ONLY_GROUPS = ('[config]', '[myloader_session_variables]')


def parse_metadata_text(text: str) -> Dict[str, List[str]]:
    metadata: Dict[str, List[str]] = {}
    group: str | None = None
    # Only LF and CRLF end a line; identifiers may contain other separators
    for line in text.replace('\r\n', '\n').split('\n'):
        if not line or line.startswith('#'):
            continue
        if line.startswith('['):
            group = line
            metadata.setdefault(group, [])
            continue
        if group is None:
            raise MetadataFormatError('line outside any group')
        metadata[group].append(line)
    return metadata


def parse_metadata(path: str) -> Dict[str, List[str]]:
    with open(path, 'r', encoding='utf-8', errors='surrogateescape', newline='') as f:
        return parse_metadata_text(f.read())


def write_metadata(metadata: Dict[str, List[str]]) -> str:
    content: List[str] = []
    for group, lines in metadata.items():
        content.append(group)
        content.extend(lines)
        content.append('')
    return '\n'.join(content)


def save_metadata(path: str, metadata: Dict[str, List[str]]) -> None:
    # surrogateescape keeps non-UTF-8 bytes from parse_metadata intact
    with open(path, 'w', encoding='utf-8', errors='surrogateescape', newline='') as f:
        f.write(write_metadata(metadata))


def merge_metadata(primary: Dict[str, List[str]], *others: Dict[str, List[str]]) -> Dict[str, List[str]]:
    """Union of all groups; config and session variables come from `primary` only."""
    merged: Dict[str, List[str]] = {group: list(lines) for group, lines in primary.items()}
    for other in others:
        for group, lines in other.items():
            if group in PRIMARY_ONLY_GROUPS:
                continue
            merged.setdefault(group, []).extend(lines)
    return merged
