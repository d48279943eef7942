"""File-based debug logging setup."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LOG_FILE_NAME = 'menu_clock.log'
_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'
_STDERR_HANDLER = 'menu_clock.stderr'


def setup_file_logging(log_dir: Path, *, verbose: bool = False) -> Path:
    """Configure debug logging into *log_dir*; with *verbose*, mirror INFO and up to stderr."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE_NAME
    root = logging.getLogger('menu_clock')
    root.setLevel(logging.DEBUG)

    # repeated CLI invocations in one process must not stack handlers
    target = os.path.abspath(log_path)
    if not any(isinstance(h, logging.FileHandler) and h.baseFilename == target for h in root.handlers):
        handler = logging.FileHandler(log_path, encoding='utf-8')
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    if verbose and not any(h.get_name() == _STDERR_HANDLER for h in root.handlers):
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.INFO)
        console.setFormatter(logging.Formatter('%(levelname)s %(message)s'))
        console.set_name(_STDERR_HANDLER)
        root.addHandler(console)

    root.debug('Debug logging started → %s', log_path)
    return log_path
