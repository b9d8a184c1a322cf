#!/usr/bin/env python3
from __future__ import annotations

from typing import Dict, List, Sequence

from .config import DbSpec

# mysql client TLS flags -> mydumper/myloader names
SSL_FLAG_MAP: Dict[str, str] = {
    '--ssl-ca=': '--ca=',
    '--ssl-capath=': '--capath=',
    '--ssl-cert=': '--cert=',
    '--ssl-cipher=': '--cipher=',
    '--ssl-key=': '--key=',
}

SSL_OPTIONS = ('ca', 'capath', 'cert', 'cipher', 'key')


def build_creds(spec: DbSpec) -> List[str]:
    """Connection flags in mysql client naming."""
    pairs = [
        ('database', spec.database),
        ('host', spec.host),
        ('port', spec.port),
        ('user', spec.username),
        ('password', spec.password),
        ('socket', spec.unix_socket),
    ]
    flags = [f"--{name}={value}" for name, value in pairs if value not in (None, '')]
    for opt in SSL_OPTIONS:
        value = spec.ssl.get(opt)
        if value not in (None, ''):
            flags.append(f"--ssl-{opt}={value}")
    return flags


def convert_ssl_flags(flags: Sequence[str]) -> List[str]:
    """Rename TLS flags for mydumper/myloader and append --ssl if any were present."""
    out: List[str] = []
    ssl_enabled = False
    for flag in flags:
        for old, new in SSL_FLAG_MAP.items():
            if flag.startswith(old):
                flag = new + flag[len(old):]
                ssl_enabled = True
                break
        out.append(flag)
    if ssl_enabled:
        out.append('--ssl')
    return out


def dumper_creds(spec: DbSpec) -> List[str]:
    return convert_ssl_flags(build_creds(spec))
