"""Shared utilities package for the hospital admin client"""

from .debug_console import (
    DebugCapturingConsole,
    create_debug_console,
    setup_debug_logger,
    configure_logging,
)

__all__ = [
    "DebugCapturingConsole",
    "create_debug_console",
    "setup_debug_logger",
    "configure_logging",
]
