#!/usr/bin/env python3
from __future__ import annotations

"""Dump command.

Runs mydumper for data (skip and structure-only tables omitted), then, when
structure-only tables are selected, a second --dirty --no-data run for just
those tables into the same directory. Both runs rewrite `<dir>/metadata`, so
the two parsed versions are merged and written back.

Inputs
- cfg: normalized config dict
- opts: DumpOptions
- runner: object with run(cmd, check=True) -> int
- list_tables: callable(DbSpec) -> list of table names (only called when a
  table selection is requested)

Outputs
- Dict with {result, path, excluded, structure_only}

Failure policy
- UsageError for rejected options or unsupported drivers; ExecutionError on
  any non-zero mydumper exit; MetadataFormatError on a malformed metadata
  file. Nothing is retried.
"""

import contextlib
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Sequence

from ..config import DbSpec
from ..creds import dumper_creds
from ..errors import UsageError
from ..metadata import merge_metadata, parse_metadata, save_metadata
from ..selection import expand_table_selection
from ..tempfiles import scoped_temp_file
from .common import absent, qualify, resolve_supported_spec

logger = logging.getLogger(__name__)


@dataclass
class DumpOptions:
    directory: str | None = None
    database: str | None = None
    target: str | None = None
    skip_tables_key: str | None = None
    structure_tables_key: str | None = None
    skip_tables_list: str | None = None
    structure_tables_list: str | None = None
    # Not supported; present so they can be rejected
    tables_key: str | None = None
    tables_list: str | None = None


def default_directory(project_root: str, now: datetime) -> str:
    return os.path.join(project_root, 'export-' + now.strftime('%Y%m%d') + '-' + now.strftime('%H%M%S'))


def validate_dump_options(opts: DumpOptions) -> None:
    if opts.tables_key is not None:
        raise UsageError('--tables-key option is not supported.')
    if opts.tables_list is not None:
        raise UsageError('--tables-list option is not supported.')


def data_dump_cmd(binary: str, creds: Sequence[str], directory: str, omit_file: str | None) -> List[str]:
    cmd = [binary, *creds, f'--outputdir={directory}']
    if omit_file:
        cmd.append(f'--omit-from-file={omit_file}')
    return cmd


def schema_dump_cmd(binary: str, creds: Sequence[str], directory: str, tables: Sequence[str]) -> List[str]:
    return [
        binary,
        *creds,
        '--dirty',
        f'--outputdir={directory}',
        '--tables-list=' + ','.join(tables),
        '--no-data',
    ]


def run_dump(
    cfg: Dict[str, Any],
    opts: DumpOptions,
    *,
    runner,
    list_tables: Callable[[DbSpec], Sequence[str]],
    now: datetime | None = None,
) -> Dict[str, Any]:
    validate_dump_options(opts)
    started = now or datetime.now()
    spec = resolve_supported_spec(cfg, opts.database, opts.target)
    directory = absent(opts.directory) or default_directory(cfg['project_root'], started)

    selection = expand_table_selection(cfg, opts, lambda: list_tables(spec))
    exclude = qualify(spec, selection.excluded)
    binary = cfg['binaries']['mydumper']
    metadata_path = os.path.join(directory, 'metadata')

    with _exclude_file(exclude) as omit_file:
        runner.run(data_dump_cmd(binary, dumper_creds(spec), directory, omit_file))
    data_meta = parse_metadata(metadata_path)

    if selection.structure:
        tables = qualify(spec, selection.structure)
        logger.info("Dumping structure only for %d tables", len(tables))
        runner.run(schema_dump_cmd(binary, dumper_creds(spec), directory, tables))
        schema_meta = parse_metadata(metadata_path)
        save_metadata(metadata_path, merge_metadata(data_meta, schema_meta))

    logger.info("Database dump saved to %s", directory)
    return {
        "result": "dumped",
        "path": directory,
        "excluded": exclude,
        "structure_only": list(selection.structure),
    }


def _exclude_file(exclude: List[str]):
    if not exclude:
        return contextlib.nullcontext(None)
    logger.debug("Omitting %d tables from data dump", len(exclude))
    return scoped_temp_file('\n'.join(exclude), suffix='.omit')

