#!/usr/bin/env python3
from __future__ import annotations

import contextlib
import os
import tempfile
from typing import Iterator


@contextlib.contextmanager
def scoped_temp_file(content: str, *, suffix: str = '') -> Iterator[str]:
    """Write `content` to a new temp file, yield its path, remove it on exit."""
    fd, path = tempfile.mkstemp(prefix='dbdump-', suffix=suffix)
    try:
        with os.fdopen(fd, 'w') as f:
            f.write(content)
        yield path
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(path)
