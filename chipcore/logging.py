"""Console logging utilities for chipcore.

Small level-filtered console logger with optional colours and elapsed-time
stamps, plus a tqdm progress bar for long headless runs.
"""

import sys
import time
from typing import Dict, Iterable, Optional

from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConsoleLogger:
    """Console logger with level filtering and coloured level tags."""

    def __init__(
        self,
        name: str = "chipcore",
        log_level: str = "WARNING",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.stream = stream
        self.set_level(log_level)
        self.use_colors = (
            use_colors and hasattr(self.output, "isatty") and self.output.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in LEVELS + ("RESET",)}
        )

        self.level_order = {level: rank for rank, level in enumerate(LEVELS)}

    @property
    def output(self):
        """Stream messages go to; stderr unless one was given."""
        return self.stream if self.stream is not None else sys.stderr

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        log_level = log_level.upper()
        if log_level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.log_level = log_level

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, file=self.output, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}


def get_logger(name: str = "chipcore") -> ConsoleLogger:
    """Return the shared logger registered under ``name``."""
    if name not in _loggers:
        _loggers[name] = ConsoleLogger(name)
    return _loggers[name]


def set_log_level(log_level: str):
    """Set the level of every logger handed out so far."""
    for logger in _loggers.values():
        logger.set_level(log_level)


def progress(iterable: Iterable, total: Optional[int] = None, desc: str = None, enabled: bool = True, **kwargs):
    """Wrap ``iterable`` in a tqdm bar, or return it untouched when disabled."""
    if not enabled:
        return iterable
    if desc is None:
        desc = f"Running ({total:,} cycles)" if total is not None else "Running"
    return tqdm(iterable, total=total, desc=desc, unit="cycle", **kwargs)
