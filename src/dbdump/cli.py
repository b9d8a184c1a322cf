#!/usr/bin/env python3
import argparse
import os
import sys
import time

import mysql.connector
import yaml

from .commands.dump import DumpOptions, run_dump
from .commands.load import LoadOptions, run_load
from .config import load_config
from .dbutil import connect, drop_all_tables, list_selectable_tables
from .env import load_dotenv
from .errors import DbdumpError
from .logsetup import setup_logging
from .runner import ProcessRunner


def _fmt_duration(seconds: float) -> str:
    total = int(seconds)
    mins, secs = divmod(total, 60)
    hours, mins = divmod(mins, 60)
    return f"{hours}h{mins}m{secs}s" if hours else f"{mins}m{secs}s"


def _emit(request: dict, run: dict, start_ts: float) -> None:
    """Print a uniform YAML envelope with request/run/runtime (runtime last)."""
    env = {}
    env["request"] = request
    env["run"] = run
    env["runtime"] = _fmt_duration(time.time() - start_ts)
    print(yaml.safe_dump(env, sort_keys=False, default_flow_style=False))


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(prog='dbdump', description="Dump and load MySQL databases with mydumper/myloader")
    p.add_argument('--env', default=os.path.join(os.getcwd(), '.env'), help='Path to .env file (default: ./.env)')
    p.add_argument('--config', help='Path to YAML config. If not provided, uses env DBDUMP_CONFIG')
    sub = p.add_subparsers(dest='action', required=True)

    def _connection_opts(sp: argparse.ArgumentParser) -> None:
        sp.add_argument('--directory', help='The output directory')
        sp.add_argument('--database', help='The DB connection key if using multiple connections in the config')
        sp.add_argument('--target', help='The name of a target within the specified database connection')

    d = sub.add_parser('dump', help='Dump a database with mydumper')
    _connection_opts(d)
    d.add_argument('--skip-tables-key', help='Comma-separated keys of table_selection.skip_tables lists')
    d.add_argument('--structure-tables-key', help='Comma-separated keys of table_selection.structure_tables lists')
    d.add_argument('--skip-tables-list', help='Comma-separated tables to leave out entirely (wildcards allowed)')
    d.add_argument('--structure-tables-list', help='Comma-separated tables to dump without data (wildcards allowed)')
    d.add_argument('--tables-key', help=argparse.SUPPRESS)
    d.add_argument('--tables-list', help=argparse.SUPPRESS)

    ld = sub.add_parser('load', help='Drop all tables and load a dump with myloader')
    _connection_opts(ld)
    return p.parse_args()


def _list_tables(spec):
    conn = connect(spec)
    try:
        return list_selectable_tables(conn)
    finally:
        conn.close()


def _drop_tables(spec):
    conn = connect(spec)
    try:
        return drop_all_tables(conn)
    finally:
        conn.close()


def main() -> int:
    args = parse_args()
    start_ts = time.time()

    # Load .env silently; commands produce their own output
    _loaded, _env_path = load_dotenv(args.env)
    logger = setup_logging()

    cfg_path = args.config or os.environ.get('DBDUMP_CONFIG')
    req = {"action": args.action, "args": sys.argv[1:], "env_file": args.env, "config": cfg_path}
    runner = ProcessRunner()
    try:
        cfg = load_config(cfg_path)
        if args.action == 'dump':
            opts = DumpOptions(
                directory=args.directory,
                database=args.database,
                target=args.target,
                skip_tables_key=args.skip_tables_key,
                structure_tables_key=args.structure_tables_key,
                skip_tables_list=args.skip_tables_list,
                structure_tables_list=args.structure_tables_list,
                tables_key=args.tables_key,
                tables_list=args.tables_list,
            )
            run = run_dump(cfg, opts, runner=runner, list_tables=_list_tables)
        else:
            opts = LoadOptions(directory=args.directory, database=args.database, target=args.target)
            run = run_load(cfg, opts, runner=runner, drop_tables=_drop_tables)
    except DbdumpError as e:
        logger.error("%s failed: %s", args.action, e)
        print(str(e), file=sys.stderr)
        _emit(req, {"result": "error", "error": str(e)}, start_ts)
        return e.exit_code
    except mysql.connector.Error as e:
        logger.error("%s failed: %s", args.action, e)
        print(f'Connection failed: {e}', file=sys.stderr)
        _emit(req, {"result": "error", "error": str(e)}, start_ts)
        return 1

    _emit(req, run, start_ts)
    if run.get("returncode"):
        return run["returncode"] if run["returncode"] > 0 else 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
