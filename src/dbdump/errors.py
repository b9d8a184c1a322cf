#!/usr/bin/env python3
from __future__ import annotations

from typing import Sequence


class DbdumpError(Exception):
    """Base class for errors reported by the CLI."""

    exit_code = 1


class UsageError(DbdumpError):
    exit_code = 2


class ConfigError(DbdumpError):
    pass


class MetadataFormatError(DbdumpError):
    pass


class ExecutionError(DbdumpError):
    def __init__(self, cmd: Sequence[str], returncode: int, message: str | None = None) -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        super().__init__(message or f"{self.cmd[0]} exited with status {returncode}")

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return self.returncode if self.returncode > 0 else 1
