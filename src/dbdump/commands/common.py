#!/usr/bin/env python3
from __future__ import annotations

from typing import Any, Dict

from ..config import DbSpec, resolve_db_spec


def absent(value: Any) -> Any:
    """Map False/empty option values to None so defaults apply."""
    if value is False or value == '':
        return None
    return value


def resolve_supported_spec(cfg: Dict[str, Any], database: Any, target: Any) -> DbSpec:
    spec = resolve_db_spec(cfg, absent(database), absent(target))
    spec.require_supported()
    return spec


def qualify(spec: DbSpec, tables) -> list[str]:
    return [f"{spec.database}.{t}" for t in tables]
