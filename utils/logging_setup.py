"""
Logging setup for match runs.

Turn-by-turn events go to the console; ``quiet`` keeps only warnings
(forfeits, rejected moves) there. A log file, when requested, always gets the
full stream.
"""

import logging
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _attach(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    quiet: bool = False,
    format_string: Optional[str] = None
) -> Optional[Path]:
    """
    Configure the root logger for a match.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level (default: logging.INFO)
        log_file: Optional log file; missing parent directories are created
        quiet: Raise the console level to WARNING
        format_string: Optional custom format string

    Returns:
        The log file path, or None when logging only to the console

    Example:
        >>> setup_logging(logging.DEBUG, Path("runs/match.log"), quiet=True)
        >>> logging.getLogger("engine.game").warning("player 2 forfeits")
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    console_level = max(level, logging.WARNING) if quiet else level
    _attach(root, logging.StreamHandler(), console_level, formatter)

    if log_file is None:
        return None
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    _attach(root, logging.FileHandler(log_file, mode='w', encoding='utf-8'), level, formatter)
    return log_file
