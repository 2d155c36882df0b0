from __future__ import annotations

import logging
import sys
import tempfile
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_LOG_PATH = "/var/log/stalwart-jmap-preinst.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

# Path of the file handler installed by configure_logging, once it has run.
_active_log_path: Optional[str] = None


def _open_log_file(log_path: str) -> Tuple[logging.FileHandler, str]:
    """Open log_path, or the same file name in the temp directory.

    An OSError from the fallback propagates to the caller.
    """

    requested = Path(log_path)
    try:
        requested.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(requested), str(requested)
    except OSError:
        fallback = Path(tempfile.gettempdir()) / requested.name
        return logging.FileHandler(fallback), str(fallback)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = False,
) -> str:
    """Attach the hook's handlers to the root logger and return the log file path.

    The package manager relays whatever the hook prints, so records go to
    stderr only when also_console is set; a successful run stays silent.
    Calling this again keeps the first configuration.
    """

    global _active_log_path

    root = logging.getLogger()
    root.setLevel(level)
    if _active_log_path is not None:
        return _active_log_path

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    file_handler, chosen = _open_log_file(log_path)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        root.addHandler(console)

    _active_log_path = chosen
    logging.getLogger(__name__).info("Logging to %s (requested %s)", chosen, log_path)
    return chosen
