#!/usr/bin/env python3
from __future__ import annotations

"""Load command.

Drops every table in the target database, then runs myloader against a dump
directory.

Inputs
- cfg: normalized config dict
- opts: LoadOptions
- runner: object with run(cmd, check=...) -> int
- drop_tables: callable(DbSpec) -> list of dropped names

Outputs
- Dict with {result, path, dropped, returncode}

Failure policy
- A failed drop is logged and reported but the load still runs; the schema
  may not exist yet. A non-zero myloader exit is returned, not raised.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence

from ..config import DbSpec
from ..creds import dumper_creds
from ..errors import UsageError
from .common import absent, resolve_supported_spec

logger = logging.getLogger(__name__)


@dataclass
class LoadOptions:
    directory: str | None = None
    database: str | None = None
    target: str | None = None


def load_cmd(binary: str, creds: Sequence[str], directory: str) -> List[str]:
    return [binary, *creds, f'--directory={directory}']


def run_load(
    cfg: Dict[str, Any],
    opts: LoadOptions,
    *,
    runner,
    drop_tables: Callable[[DbSpec], Sequence[str]],
) -> Dict[str, Any]:
    directory = absent(opts.directory)
    if not directory:
        raise UsageError('--directory is required for load.')
    spec = resolve_supported_spec(cfg, opts.database, opts.target)

    dropped: List[str] | None
    try:
        dropped = list(drop_tables(spec))
        logger.info("Dropped %d tables/views in %s", len(dropped), spec.database)
    except Exception as e:
        logger.warning("Dropping tables in %s failed: %s", spec.database, e)
        print(f"Dropping existing tables failed: {e}", flush=True)
        dropped = None

    returncode = runner.run(load_cmd(cfg['binaries']['myloader'], dumper_creds(spec), directory), check=False)
    return {
        "result": "loaded" if returncode == 0 else "error",
        "path": directory,
        "dropped": dropped,
        "returncode": returncode,
    }
