"""
Run logging for the CO2 analysis pipeline.

All modules log through the ``co2_analysis`` logger. A run attaches a stderr
handler and a ``<run_id>.log`` file handler; stdout is reserved for the text
report.
"""
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = 'co2_analysis'
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# cmdstanpy reports every Stan chain at INFO
NOISY_LOGGERS = ('cmdstanpy', 'prophet', 'matplotlib')


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


def _attach(logger: logging.Logger, handler: logging.Handler, level: int):
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(
    log_dir: Optional[Path] = None,
    run_id: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    console: bool = True
) -> logging.Logger:
    """
    Configure the package logger for one run.

    Handlers from a previous run are detached and closed first.

    Args:
        log_dir: Directory for the run log file (no file when None)
        run_id: Log file stem; defaults to ``co2_analysis``
        level: Logging level, as an int or a name such as ``'DEBUG'``
        console: Whether to log to stderr

    Returns:
        Configured logger
    """
    level = _resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        _attach(logger, logging.StreamHandler(sys.stderr), level)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{run_id or LOGGER_NAME}.log"
        _attach(logger, logging.FileHandler(log_file, encoding='utf-8'), level)
        logger.info(f"Logging to: {log_file}")

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Package logger (or a child of it)."""
    return logging.getLogger(name)


class LogContext:
    """
    Bracket one pipeline component in the log.

    Logs ``Starting: <component>`` on entry, then either
    ``Completed: <component> (<seconds>s)`` or ``Failed: <component> - <error>``.
    Exceptions are never suppressed.
    """

    def __init__(self, logger: logging.Logger, component: str):
        self.logger = logger
        self.component = component
        self.elapsed = None
        self._started = None

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.info(f"Starting: {self.component}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self._started
        if exc_type is None:
            self.logger.info(f"Completed: {self.component} ({self.elapsed:.2f}s)")
        else:
            self.logger.error(f"Failed: {self.component} - {exc_val}")
        return False
