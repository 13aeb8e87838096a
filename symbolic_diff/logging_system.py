"""
Logging for the differentiation engine.

One process-wide DifferentiationLogger decides, from its LogLevel, which
records reach the 'symbolic_diff' logger. Simplification reports merges and
folds on the debug channel; differentiation and verification report each
operation on the info channel at DETAILED.
"""

import logging
import sys
from typing import Optional, Dict, Any
from enum import Enum
from datetime import datetime


class LogLevel(Enum):
    """Verbosity of the engine, from quiet to every rewrite step"""
    SILENT = 0      # Nothing, not even aborted runs
    MINIMAL = 1     # Results, warnings and aborted runs
    MODERATE = 2    # Which expression a run works on
    DETAILED = 3    # Each differentiation and verification
    VERBOSE = 4     # Each merge, fold and zero absorption inside simplify


_RECORD_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
_TIME_FORMAT = '%H:%M:%S'


def _default_log_path() -> str:
    return f"symbolic_diff_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"


class DifferentiationLogger:
    """
    Verbosity-gated front end over the 'symbolic_diff' standard logger.

    Building a new instance replaces the handlers of the previous one, so
    only the most recently configured destinations receive records.
    """

    def __init__(self, log_level: LogLevel = LogLevel.MINIMAL,
                 log_to_file: bool = False, log_file_path: Optional[str] = None):
        self.log_level = log_level
        self.log_to_file = log_to_file
        self.logger = logging.getLogger('symbolic_diff')
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self._reset_handlers()

        destinations = []
        if log_level != LogLevel.SILENT:
            destinations.append(logging.StreamHandler(sys.stdout))
        if log_to_file:
            destinations.append(logging.FileHandler(log_file_path or _default_log_path()))

        formatter = logging.Formatter(_RECORD_FORMAT, datefmt=_TIME_FORMAT)
        for handler in destinations:
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def _reset_handlers(self):
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def _should_log(self, required_level: LogLevel) -> bool:
        return self.log_level.value >= required_level.value

    def critical(self, message: str):
        """Aborted runs; suppressed only when SILENT"""
        if self.log_level != LogLevel.SILENT:
            self.logger.error(f"CRITICAL: {message}")

    def info(self, message: str, required_level: LogLevel = LogLevel.MINIMAL):
        if self._should_log(required_level):
            self.logger.info(message)

    def milestone(self, message: str):
        self.info(f"MILESTONE: {message}", LogLevel.MODERATE)

    def warning(self, message: str):
        if self._should_log(LogLevel.MINIMAL):
            self.logger.warning(message)

    def debug(self, message: str):
        """Rewrite steps of simplify, VERBOSE only"""
        if self._should_log(LogLevel.VERBOSE):
            self.logger.debug(f"DEBUG: {message}")

    def result_summary(self, results: Dict[str, Any]):
        """Block of key/value lines describing a finished differentiation"""
        if not self._should_log(LogLevel.DETAILED):
            return

        rule = "=" * 60
        lines = [rule, "DIFFERENTIATION RESULTS:", rule]
        for key, value in results.items():
            shown = f"{value:.6f}" if isinstance(value, float) else value
            lines.append(f"{key:.<30} {shown}")
        for line in lines:
            self.logger.info(line)


_global_logger: Optional[DifferentiationLogger] = None


def get_logger() -> DifferentiationLogger:
    """The process-wide logger, created at MINIMAL on first use"""
    global _global_logger
    if _global_logger is None:
        _global_logger = DifferentiationLogger()
    return _global_logger


def set_log_level(level: LogLevel):
    """Change the verbosity without touching the handlers"""
    global _global_logger
    if _global_logger is None:
        _global_logger = DifferentiationLogger(log_level=level)
    else:
        _global_logger.log_level = level


def configure_logging(log_level: LogLevel = LogLevel.MINIMAL,
                      log_to_file: bool = False,
                      log_file_path: Optional[str] = None) -> DifferentiationLogger:
    """Rebuild the process-wide logger with new destinations"""
    global _global_logger
    _global_logger = DifferentiationLogger(log_level, log_to_file, log_file_path)
    return _global_logger


def log_info(message: str, level: LogLevel = LogLevel.MINIMAL):
    get_logger().info(message, level)


def log_milestone(message: str):
    get_logger().milestone(message)


def log_warning(message: str):
    get_logger().warning(message)


def log_debug(message: str):
    get_logger().debug(message)
