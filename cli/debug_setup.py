"""Logging and console setup for CLI"""

from rich.console import Console

from settings import DEBUG_LOG_FILE, LOG_LEVEL
from utils.debug_console import configure_logging, create_debug_console


def setup_debug_console(debug: bool, base_url: str) -> Console:
    """
    Configure logging and return the console the CLI should print to

    Args:
        debug: Whether debug mode is enabled
        base_url: API base URL, recorded at the start of a debug session

    Returns:
        Console instance (either regular or debug-enabled)
    """
    debug_logger = configure_logging(debug, LOG_LEVEL, DEBUG_LOG_FILE)
    console = create_debug_console(debug_enabled=debug, debug_logger=debug_logger)

    if debug_logger:
        debug_logger.debug("[CLI] ===== CLI SESSION STARTED =====")
        debug_logger.debug(f"[CLI] API base URL: {base_url}")

    return console
