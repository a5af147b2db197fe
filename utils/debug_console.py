"""Debug logging setup and console output capture.

In debug mode every Rich console print is mirrored, as plain text, into the
same log file that receives the library loggers, so a support log shows
what the user saw next to the HTTP and token refresh activity.
"""

import io
import logging
import os
import re
from typing import Optional
from rich.console import Console

ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CAPTURE_LOGGER = "hospital_admin.console"
CAPTURE_PREFIX = "[CONSOLE] "


class DebugCapturingConsole(Console):
    """Console that logs a markup-free copy of everything it prints"""

    def __init__(self, capture_logger: logging.Logger, **kwargs):
        super().__init__(**kwargs)
        self.capture_logger = capture_logger

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)
        if not self.capture_logger.isEnabledFor(logging.DEBUG):
            return
        text = self.plain_text(*objects, **kwargs)
        if text.strip():
            self.capture_logger.debug(CAPTURE_PREFIX + text)

    def plain_text(self, *objects, **kwargs) -> str:
        """Render objects the way print would, minus colour and styling"""
        buffer = io.StringIO()
        Console(file=buffer, width=self.width, no_color=True, force_terminal=False).print(*objects, **kwargs)
        return ANSI_ESCAPE.sub('', buffer.getvalue()).rstrip()


def create_debug_console(debug_enabled: bool = False,
                         debug_logger: Optional[logging.Logger] = None) -> Console:
    """Capturing console in debug mode, a plain Rich console otherwise"""
    if debug_enabled and debug_logger is not None:
        return DebugCapturingConsole(debug_logger)
    return Console()


def setup_debug_logger(log_file: str) -> logging.Logger:
    """
    Logger receiving console captures, written straight to log_file.

    Args:
        log_file: Debug log path, shared with the root file handler

    Returns:
        The capture logger
    """
    capture = logging.getLogger(CAPTURE_LOGGER)
    capture.setLevel(logging.DEBUG)
    capture.handlers.clear()

    handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
    capture.addHandler(handler)
    # Captured lines must not be echoed back to the terminal by root handlers
    capture.propagate = False
    return capture


def configure_logging(debug: bool, log_level: str, log_file: str) -> Optional[logging.Logger]:
    """
    Configure the root logger for a CLI session.

    Without debug, only records at log_level and above reach stderr. With
    debug, everything is appended to log_file and also echoed to stderr.

    Returns:
        The console capture logger in debug mode, otherwise None
    """
    root = logging.getLogger()
    root.handlers.clear()
    formatter = logging.Formatter(LOG_FORMAT)

    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(formatter)
    root.addHandler(stderr_handler)

    if not debug:
        root.setLevel(getattr(logging, log_level.upper(), logging.WARNING))
        return None

    root.setLevel(logging.DEBUG)
    log_path = os.path.abspath(log_file)
    file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    # httpx/httpcore are chatty at DEBUG, their request lines are enough
    logging.getLogger("httpcore").setLevel(logging.INFO)

    logging.getLogger(__name__).info(f"Debug logging enabled - appending to {log_path}")
    return setup_debug_logger(log_path)
