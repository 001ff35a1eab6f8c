"""
debug.py - Logging facilities for the Connect Four engine

This module wraps the standard `logging` package in a single manager with
configurable levels, per-component filtering, optional file output and
simple performance timers. Every other module logs through the `debug`
singleton defined at the bottom of this file.
"""

import logging
import sys
import time
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set

LOGGER_NAME = "connect4_engine"


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# Mapping to standard logging levels
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG  # TRACE messages are emitted as DEBUG records
}

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Manages logging for the engine and its adapters."""

    def __init__(self, level: DebugLevel = DebugLevel.WARNING):
        self._level = level
        self._enabled = True
        self._log_file: Optional[str] = None
        self._enabled_components: Set[str] = set()  # Empty set means all components
        self._logger = self._setup_logger()
        self._performance_markers: Dict[str, float] = {}

    @property
    def level(self) -> DebugLevel:
        return self._level

    def _setup_logger(self) -> logging.Logger:
        """Configure and return the package logger."""
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(LEVEL_MAP[self._level])

        # Re-importing must not stack console handlers
        if not any(getattr(h, "_connect4_console", False) for h in logger.handlers):
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
            console_handler._connect4_console = True
            logger.addHandler(console_handler)

        return logger

    def configure(self, level: DebugLevel = None,
                  enabled: bool = None,
                  log_file: str = None,
                  components: List[str] = None):
        """
        Configure the debug manager settings.

        Args:
            level: Debug level to set
            enabled: Whether logging is enabled at all
            log_file: Path to log file ("" removes file logging)
            components: Components to log for (empty for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()

            self._log_file = log_file or None
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._enabled_components = set(components)

    def _should_log(self, level: DebugLevel, component: str = None) -> bool:
        """Determine if a message should be logged based on settings."""
        if not self._enabled or level == DebugLevel.NONE:
            return False

        if level.value > self._level.value:
            return False

        if component and self._enabled_components and component not in self._enabled_components:
            return False

        return True

    def log(self, level: DebugLevel, message: str, component: str = None):
        """
        Log a message at the specified level.

        Args:
            level: Debug level for the message
            message: The message to log
            component: Optional component name for filtering
        """
        if not self._should_log(level, component):
            return

        if component:
            message = f"[{component}] {message}"

        if level == DebugLevel.ERROR:
            self._logger.error(message)
        elif level == DebugLevel.WARNING:
            self._logger.warning(message)
        elif level == DebugLevel.INFO:
            self._logger.info(message)
        elif level == DebugLevel.DEBUG:
            self._logger.debug(message)
        elif level == DebugLevel.TRACE:
            self._logger.debug(f"TRACE: {message}")

    def error(self, message: str, component: str = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: str = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: str = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: str = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: str = None):
        self.log(DebugLevel.TRACE, message, component)

    # Performance tracking
    def start_timer(self, marker_name: str):
        """Start a timer for performance tracking."""
        self._performance_markers[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: str = None) -> Optional[float]:
        """
        End a timer and log the elapsed time.

        Returns:
            Elapsed time in seconds, or None if the marker was never started
        """
        started = self._performance_markers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.trace(f"Performance [{marker_name}]: {elapsed:.6f} seconds", component)
        return elapsed

    @contextmanager
    def timer(self, marker_name: str, component: str = None) -> Iterator[None]:
        """Time the enclosed block with start_timer/end_timer."""
        self.start_timer(marker_name)
        try:
            yield
        finally:
            self.end_timer(marker_name, component)

    def set_from_string(self, level_str: str) -> bool:
        """Set the level from a string such as a command line argument."""
        try:
            level = DebugLevel[level_str.upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return False
        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")
        return True


# Shared instance used across the package
debug = DebugManager()
