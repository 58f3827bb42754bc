"""
Logging for the CLI and the service layer.
Log records go to stderr (and optionally a file) so backtest reports printed
on stdout stay clean when redirected.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP chatter from the Binance client at DEBUG
NOISY_LOGGERS = ("binance", "urllib3")


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    level: Union[str, int] = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Configure the `trade_intel` logger and return it.

    Calling again replaces the previous handlers (closing any open log file).
    Loggers named in `quiet` are held at WARNING unless `level` is stricter.
    """
    log_level = _resolve_level(level)
    pkg = logging.getLogger("trade_intel")
    pkg.setLevel(log_level)
    pkg.propagate = False
    for handler in list(pkg.handlers):
        pkg.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    pkg.addHandler(console)

    if log_dir and log_file:
        path = Path(log_dir) / log_file
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(formatter)
        pkg.addHandler(fh)

    for name in quiet:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    return pkg
