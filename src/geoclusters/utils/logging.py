"""
Logging utilities for geoclusters.

Provides a small level system on top of :mod:`logging` (QUIET / NORMAL /
VERBOSE / DEBUG), coloured console output and a tqdm-based progress tracker
for multi-step CLI runs.
"""

import logging
import os
import sys
from enum import Enum

from tqdm import tqdm


class LogLevel(Enum):
    """Verbosity levels understood by the CLI and the library."""

    QUIET = 0  # Errors only
    NORMAL = 1  # Progress and results
    VERBOSE = 2  # Adds per-step details
    DEBUG = 3  # Everything


class Colors:
    """ANSI color codes for terminal output."""

    BLUE = "\033[34m"
    GREEN = "\033[32m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    GRAY = "\033[90m"
    MAGENTA = "\033[35m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class Symbols:
    """Unicode symbols for status messages."""

    CHECK = "✓"
    CROSS = "✗"
    GEAR = "⚙"
    WARNING = "⚠"
    INFO = "ℹ"
    ROCKET = "🚀"


_LEVEL_TO_LOGGING = {
    LogLevel.QUIET: logging.ERROR,
    LogLevel.NORMAL: logging.INFO,
    LogLevel.VERBOSE: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}

_THIRD_PARTY_LOGGERS = ("numba", "matplotlib", "urllib3", "PIL", "asyncio")


class SimpleFormatter(logging.Formatter):
    """Formatter that colours the whole message according to its level."""

    COLORS = {
        "DEBUG": Colors.GRAY,
        "INFO": Colors.CYAN,
        "WARNING": Colors.YELLOW,
        "ERROR": Colors.RED,
        "CRITICAL": Colors.RED + Colors.BOLD,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        return f"{color}{record.getMessage()}{Colors.RESET}"


class GeoclustersLogger:
    """Process-wide logger facade with level-aware helpers."""

    _current_level: LogLevel = LogLevel.NORMAL
    _loggers: dict[str, logging.Logger] = {}

    @classmethod
    def set_level(cls, level: LogLevel) -> None:
        cls._current_level = level
        for logger in cls._loggers.values():
            cls._configure_logger_level(logger, level)

    @classmethod
    def get_level(cls) -> LogLevel:
        return cls._current_level

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Return a cached :class:`logging.Logger` configured for the current level."""
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            cls._configure_logger_level(logger, cls._current_level)
            cls._loggers[name] = logger
        return cls._loggers[name]

    @classmethod
    def _configure_logger_level(cls, logger: logging.Logger, level: LogLevel) -> None:
        # The CLI exports its effective level so loggers created later
        # (including in imported modules) agree with it.
        env_level = os.environ.get("GEOCLUSTERS_EFFECTIVE_LOG_LEVEL")
        if env_level:
            try:
                level = LogLevel[env_level.upper()]
            except KeyError:
                pass
        logger.setLevel(_LEVEL_TO_LOGGING.get(level, logging.INFO))

    @classmethod
    def progress(cls, message: str, symbol: str = Symbols.GEAR) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("geoclusters.progress").info(
                f"{Colors.BLUE}{symbol} {message}{Colors.RESET}"
            )

    @classmethod
    def success(cls, message: str, symbol: str = Symbols.CHECK) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("geoclusters.success").info(
                f"{Colors.GREEN}{symbol} {message}{Colors.RESET}"
            )

    @classmethod
    def info(cls, message: str, symbol: str = Symbols.INFO) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("geoclusters.info").info(f"{symbol} {message}")

    @classmethod
    def detail(cls, message: str, prefix: str = "  ") -> None:
        if cls._current_level.value >= LogLevel.VERBOSE.value:
            cls.get_logger("geoclusters.detail").info(f"{prefix} {message}")

    @classmethod
    def debug(cls, message: str, logger_name: str = "geoclusters.debug") -> None:
        if cls._current_level.value >= LogLevel.DEBUG.value:
            cls.get_logger(logger_name).debug(message)

    @classmethod
    def warning(cls, message: str, symbol: str = Symbols.WARNING) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("geoclusters.warning").warning(
                f"{Colors.YELLOW}{symbol} {message}{Colors.RESET}"
            )

    @classmethod
    def error(cls, message: str, symbol: str = Symbols.CROSS) -> None:
        # Errors are shown at every level, QUIET included.
        cls.get_logger("geoclusters.error").error(
            f"{Colors.RED}{symbol} {message}{Colors.RESET}"
        )


def suppress_third_party_logs() -> None:
    """Keep chatty dependencies at WARNING so they don't drown our output."""
    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(level: LogLevel | None = None) -> None:
    """Configure the ``geoclusters`` logger tree.

    When ``level`` is omitted, ``GEOCLUSTERS_LOG_LEVEL`` (quiet, normal,
    verbose, debug) is consulted, falling back to NORMAL.
    """
    if level is None:
        env_value = os.environ.get("GEOCLUSTERS_LOG_LEVEL", "").lower()
        level = {
            "quiet": LogLevel.QUIET,
            "verbose": LogLevel.VERBOSE,
            "debug": LogLevel.DEBUG,
        }.get(env_value, LogLevel.NORMAL)

    GeoclustersLogger.set_level(level)
    os.environ["GEOCLUSTERS_EFFECTIVE_LOG_LEVEL"] = level.name

    root_logger = logging.getLogger("geoclusters")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SimpleFormatter())
    if level == LogLevel.QUIET:
        handler.setLevel(logging.ERROR)
    elif level == LogLevel.DEBUG:
        handler.setLevel(logging.DEBUG)
    else:
        handler.setLevel(logging.INFO)

    root_logger.addHandler(handler)
    root_logger.setLevel(_LEVEL_TO_LOGGING.get(level, logging.INFO))
    root_logger.propagate = False

    suppress_third_party_logs()


class ProgressTracker:
    """Step-wise progress bar for CLI pipelines; silent in QUIET mode."""

    def __init__(self, steps: list[str]):
        self.steps = steps
        self.current = 0
        self.show_progress = GeoclustersLogger.get_level() != LogLevel.QUIET
        self.pbar = None
        if self.show_progress:
            self.pbar = tqdm(
                total=len(steps),
                desc=f"{Colors.BLUE}{Symbols.ROCKET} Progress{Colors.RESET}",
                bar_format="{desc}: {percentage:3.0f}%|{bar:30}| {n_fmt}/{total_fmt}",
            )

    def advance(self, message: str | None = None, status: str = "success") -> None:
        if self.pbar is not None:
            if message:
                color = Colors.GREEN if status == "success" else Colors.YELLOW
                symbol = Symbols.CHECK if status == "success" else Symbols.WARNING
                self.pbar.write(f"{color}{symbol} {message}{Colors.RESET}")
            self.pbar.update(1)
        self.current += 1

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.write(
                f"\n{Colors.GREEN}{Symbols.CHECK} All steps completed{Colors.RESET}"
            )
            self.pbar.close()


def log_progress(message: str, symbol: str = Symbols.GEAR) -> None:
    GeoclustersLogger.progress(message, symbol)


def log_success(message: str, symbol: str = Symbols.CHECK) -> None:
    GeoclustersLogger.success(message, symbol)


def log_info(message: str, symbol: str = Symbols.INFO) -> None:
    GeoclustersLogger.info(message, symbol)


def log_detail(message: str, prefix: str = "  ") -> None:
    GeoclustersLogger.detail(message, prefix)


def log_debug(message: str, logger_name: str = "geoclusters.debug") -> None:
    GeoclustersLogger.debug(message, logger_name)


def log_warning(message: str, symbol: str = Symbols.WARNING) -> None:
    GeoclustersLogger.warning(message, symbol)


def log_error(message: str, symbol: str = Symbols.CROSS) -> None:
    GeoclustersLogger.error(message, symbol)
