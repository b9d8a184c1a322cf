#!/usr/bin/env python3
from __future__ import annotations

from typing import List

import mysql.connector

from ..config import DbSpec


def connect(spec: DbSpec, *, connect_timeout: int = 5):
    kwargs = {
        'database': spec.database,
        'user': spec.username,
        'password': spec.password or '',
        'connection_timeout': connect_timeout,
    }
    if spec.unix_socket:
        kwargs['unix_socket'] = spec.unix_socket
    else:
        kwargs['host'] = spec.host or 'localhost'
        kwargs['port'] = spec.port or 3306
    if spec.ssl.get('ca'):
        kwargs['ssl_ca'] = spec.ssl['ca']
    if spec.ssl.get('cert'):
        kwargs['ssl_cert'] = spec.ssl['cert']
    if spec.ssl.get('key'):
        kwargs['ssl_key'] = spec.ssl['key']
    return mysql.connector.connect(**kwargs)


def list_tables(conn) -> List[str]:
    cur = conn.cursor()
    try:
        cur.execute("SHOW FULL TABLES WHERE Table_type = 'BASE TABLE'")
        return [str(r[0]) for r in (cur.fetchall() or [])]
    finally:
        cur.close()


def list_views(conn) -> List[str]:
    cur = conn.cursor()
    try:
        cur.execute("SHOW FULL TABLES WHERE Table_type = 'VIEW'")
        return [str(r[0]) for r in (cur.fetchall() or [])]
    finally:
        cur.close()


def list_selectable_tables(conn) -> List[str]:
    """Base tables and views; both can be named in a table selection."""
    cur = conn.cursor()
    try:
        cur.execute("SHOW TABLES")
        return [str(r[0]) for r in (cur.fetchall() or [])]
    finally:
        cur.close()
