#!/usr/bin/env python3
from __future__ import annotations

from typing import List

from .introspect import list_tables, list_views


def _quote(name: str) -> str:
    return '`' + name.replace('`', '``') + '`'


def drop_all_tables(conn) -> List[str]:
    """Drop every view and base table in the connection's database.

    Foreign key checks are disabled for the session so order does not matter.
    Returns the names dropped.
    """
    views = list_views(conn)
    tables = list_tables(conn)
    cur = conn.cursor()
    try:
        cur.execute('SET FOREIGN_KEY_CHECKS = 0')
        if views:
            cur.execute('DROP VIEW IF EXISTS ' + ', '.join(_quote(v) for v in views))
        if tables:
            cur.execute('DROP TABLE IF EXISTS ' + ', '.join(_quote(t) for t in tables))
        cur.execute('SET FOREIGN_KEY_CHECKS = 1')
    finally:
        cur.close()
    conn.commit()
    return views + tables
