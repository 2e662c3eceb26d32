"""Console logging utilities for chip8core hosts.

Provides a small level-filtered console logger and a formatter that renders
the machine registers on a single line, used when reporting engine errors.
"""

import sys
import time

from chip8core.state import EmulatorState


LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ConsoleLogger:
    """Console logger with level filtering, colors and elapsed-time stamps."""

    def __init__(
        self,
        name: str = "chip8core",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        if log_level.upper() not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream if stream is not None else sys.stdout
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return LEVELS.index(level) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{_COLORS[level]}{level_str}{_RESET}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        level = level.upper()
        if self._should_log(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

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


def format_state(state: EmulatorState) -> str:
    """One-line dump of PC, I, stack depth, timers and V0-VF."""
    registers = " ".join(f"V{index:X}={int(value):02X}" for index, value in enumerate(state.V))
    return (
        f"PC={int(state.pc):03X} I={int(state.I):03X} SP={int(state.stack.pointer)} "
        f"DT={int(state.delay_timer)} ST={int(state.sound_timer)} | {registers}"
    )
