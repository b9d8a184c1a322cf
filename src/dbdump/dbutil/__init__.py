#!/usr/bin/env python3
from __future__ import annotations

# Re-export public API to keep imports like `from dbdump.dbutil import ...`.

from .introspect import (
    connect,
    list_selectable_tables,
    list_tables,
    list_views,
)

from .ddl import (
    drop_all_tables,
)

__all__ = [
    # introspect
    'connect', 'list_selectable_tables', 'list_tables', 'list_views',
    # ddl
    'drop_all_tables',
]
