#!/usr/bin/env python3
from __future__ import annotations

"""Table selection expansion.

Resolves the skip and structure-only table lists for a dump from either an
explicit comma-separated list or named lists in the config, then expands
`*` and `?` wildcards (case-insensitive) against the tables and views present
in the database.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Tuple

from .errors import UsageError


@dataclass(frozen=True)
class TableSelection:
    skip: Tuple[str, ...] = ()
    structure: Tuple[str, ...] = ()

    @property
    def excluded(self) -> List[str]:
        # skip first, then structure; de-duplicated
        return list(dict.fromkeys(self.skip + self.structure))


def _split(value: str | None) -> List[str]:
    return [x.strip() for x in str(value or '').split(',') if x.strip()]


def raw_table_list(named: Dict[str, List[str]], key: str | None, explicit: str | None, option: str) -> List[str]:
    if explicit:
        return _split(explicit)
    tables: List[str] = []
    for k in _split(key):
        if k not in named:
            raise UsageError(f"Unknown {option} key: {k}")
        tables.extend(named[k])
    return tables


def wildcard_regex(pattern: str) -> re.Pattern[str]:
    """`*` matches any run of characters, `?` one character; nothing else is special."""
    body = re.escape(pattern).replace(r'\*', '.*').replace(r'\?', '.')
    return re.compile(body, re.IGNORECASE)


def expand_tables(patterns: Sequence[str], db_tables: Sequence[str]) -> List[str]:
    out: List[str] = []
    for pat in patterns:
        if '*' in pat or '?' in pat:
            rx = wildcard_regex(pat)
            out.extend(t for t in db_tables if rx.fullmatch(t))
        elif pat in db_tables:
            out.append(pat)
    return list(dict.fromkeys(out))


def expand_table_selection(cfg: Dict[str, Any], options: Any, list_tables: Callable[[], Sequence[str]]) -> TableSelection:
    sel = cfg.get('table_selection') or {}
    skip_raw = raw_table_list(sel.get('skip_tables') or {}, options.skip_tables_key, options.skip_tables_list, 'skip-tables')
    struct_raw = raw_table_list(sel.get('structure_tables') or {}, options.structure_tables_key, options.structure_tables_list, 'structure-tables')
    if not skip_raw and not struct_raw:
        return TableSelection()
    db_tables = list(list_tables())
    skip = expand_tables(skip_raw, db_tables)
    structure = [t for t in expand_tables(struct_raw, db_tables) if t not in skip]
    return TableSelection(skip=tuple(skip), structure=tuple(structure))
