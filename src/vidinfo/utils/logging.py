"""Logging utilities."""

import logging
import sys
import traceback
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(debug: bool = False):
    """Log to the console; used by the command line entry point."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def log_error(msg: str, exc: Optional[BaseException] = None,
              log_file: Union[str, Path, None] = None):
    """Append an error and its traceback to a log file."""
    log_file = Path(log_file) if log_file else Path.home() / "vidinfo_error.log"
    try:
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"{msg}\n")
            if exc:
                f.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
            f.write("-" * 50 + "\n")
    except OSError:
        pass  # Can't log if logging fails
