import json
import sys
from datetime import datetime
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


class Colors:
    """ANSI color codes for console output"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    BRIGHT_BLACK = '\033[90m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_CYAN = '\033[96m'
    WHITE = '\033[37m'


class TrackerLogger:
    """Colorized console logger for service-level events, tagged by service and context"""

    LEVEL_COLORS = {
        LogLevel.DEBUG: Colors.BRIGHT_CYAN,
        LogLevel.INFO: Colors.BRIGHT_BLUE,
        LogLevel.WARNING: Colors.BRIGHT_YELLOW,
        LogLevel.ERROR: Colors.BRIGHT_RED,
        LogLevel.SUCCESS: Colors.BRIGHT_GREEN,
    }

    def __init__(self, service_name: str = "TRACKER", enable_colors: bool = True, stream=None):
        self.service_name = service_name.upper()
        self.enable_colors = enable_colors
        self.stream = stream

    def _colorize(self, text: str, color: str) -> str:
        if not self.enable_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _prefix(self, context: Optional[str]) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        service_context = self.service_name
        if context:
            service_context += f"/{context.upper()}"
        return (
            f"{self._colorize(f'[{timestamp}]', Colors.DIM)} "
            f"{self._colorize(f'[{service_context}]', Colors.BRIGHT_BLACK)}"
        )

    @staticmethod
    def _format_extras(extras: dict) -> str:
        parts = []
        for key, value in extras.items():
            if isinstance(value, (dict, list)):
                value_str = json.dumps(value, default=str, separators=(',', ':'))
                if len(value_str) > 100:
                    value_str = value_str[:100] + "..."
            else:
                value_str = str(value)
            parts.append(f"{key}={value_str}")
        return ", ".join(parts)

    def _emit(self, line: str):
        stream = self.stream or sys.stdout
        print(line, file=stream)
        stream.flush()

    def _log(self, level: LogLevel, message: str, context: Optional[str] = None, **kwargs):
        level_color = self.LEVEL_COLORS.get(level, Colors.WHITE)
        level_text = self._colorize(f"[{level.value}]", level_color + Colors.BOLD)
        line = f"{self._prefix(context)} {level_text} {message}"
        if kwargs:
            line += self._colorize(f" | {self._format_extras(kwargs)}", Colors.DIM)
        self._emit(line)

    def debug(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.INFO, message, context, **kwargs)

    def warning(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.WARNING, message, context, **kwargs)

    def error(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.ERROR, message, context, **kwargs)

    def success(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.SUCCESS, message, context, **kwargs)


# Logger instances per service
plan_logger = TrackerLogger("PLAN")
workout_logger = TrackerLogger("WORKOUT")
progress_logger = TrackerLogger("PROGRESS")
auth_logger = TrackerLogger("AUTH")
catalog_logger = TrackerLogger("CATALOG")
