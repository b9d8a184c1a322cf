#!/usr/bin/env python3
import os
from typing import Tuple


def load_dotenv(path: str, *, override: bool = False) -> Tuple[int, str]:
    """Read KEY=VALUE lines from `path` into os.environ. Returns (count, path).

    Variables already present in the environment win unless `override` is set.
    A missing file is not an error.
    """
    count = 0
    if not os.path.isfile(path):
        return 0, path
    with open(path, 'r') as f:
        for raw in f:
            line = raw.strip()
            if not line or line.startswith('#') or '=' not in line:
                continue
            if line.startswith('export '):
                line = line[len('export '):]
            key, val = line.split('=', 1)
            key = key.strip()
            val = val.strip()
            if val[:1] in ('"', "'") and val[-1:] == val[:1] and len(val) > 1:
                val = val[1:-1]
            elif ' #' in val:
                val = val.split(' #', 1)[0].rstrip()
            if not key or (key in os.environ and not override):
                continue
            os.environ[key] = val
            count += 1
    return count, path
