#!/usr/bin/env python3
from __future__ import annotations

import logging
import subprocess
import sys
from typing import IO, Sequence

from .errors import ExecutionError
from .logsetup import mask_args

logger = logging.getLogger(__name__)


class ProcessRunner:
    """Run external binaries, streaming their combined output as it arrives."""

    def __init__(self, out: IO[str] | None = None) -> None:
        self._out = out

    @property
    def out(self) -> IO[str]:
        # Resolved late so redirected stdout is honoured
        return self._out if self._out is not None else sys.stdout

    def run(self, cmd: Sequence[str], *, check: bool = True) -> int:
        args = [str(a) for a in cmd]
        logger.info("Running: %s", mask_args(args))
        try:
            proc = subprocess.Popen(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                text=True,
                errors='replace',
            )
        except FileNotFoundError:
            logger.error("Command not found: %s", args[0])
            raise ExecutionError(args, 127, f"{args[0]}: command not found")
        assert proc.stdout is not None
        with proc.stdout:
            for line in proc.stdout:
                self.out.write(line)
                self.out.flush()
        returncode = proc.wait()
        logger.info("%s exited with status %s", args[0], returncode)
        if check and returncode != 0:
            raise ExecutionError(args, returncode)
        return returncode
