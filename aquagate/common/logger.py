import logging
import os
import re
import sys
from datetime import datetime

from aquagate.config.config import LOG_DIR, LOG_LEVEL

LOG_FILE = os.path.join(LOG_DIR, f"log_{datetime.now().strftime('%Y-%m-%d')}.log")

# ANSI escape sequence regex to strip color codes from logs
ANSI_RE = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")


class StripAnsiFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = ANSI_RE.sub("", record.msg)
        return True


_configured = False


def _configure_root_logger():
    global _configured
    if _configured:
        return

    level = logging.getLevelName(LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    ansi_filter = StripAnsiFilter()

    # File handler with UTF-8 encoding
    file_error = None
    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        fh = logging.FileHandler(LOG_FILE, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(fmt)
        fh.addFilter(ansi_filter)
        root.addHandler(fh)
    except OSError as e:
        # Read-only deployments still get console logging
        file_error = e

    # Console handler for dev visibility
    sh = logging.StreamHandler(stream=sys.stdout)
    sh.setLevel(level)
    sh.setFormatter(fmt)
    sh.addFilter(ansi_filter)
    root.addHandler(sh)

    _configured = True
    if file_error is not None:
        root.warning(f"File logging disabled, cannot write {LOG_FILE}: {file_error}")


def get_logger(name: str) -> logging.Logger:
    _configure_root_logger()
    return logging.getLogger(name)
