import atexit
import logging
import logging.handlers
import os
from pathlib import (
    Path,
)
import queue
import sys
from typing import (
    Any,
)

# Records from every peer_id logger go through this queue
log_queue: "queue.Queue[Any]" = queue.Queue()

# Store the current listener to stop it on exit
_current_listener: logging.handlers.QueueListener | None = None

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ROOT_LOGGER_NAME = "peer_id"


def _parse_debug_modules(debug_str: str) -> dict[str, int]:
    """
    Parse the PEER_ID_DEBUG environment variable into module-specific log levels.

    Format examples:
    - "DEBUG"  # All modules at DEBUG level
    - "peer_id.id:DEBUG"  # Only the id module at DEBUG
    - "id:DEBUG"  # Same as above, peer_id prefix is optional
    - "id:DEBUG,crypto.rsa:INFO"  # Multiple modules
    """
    module_levels: dict[str, int] = {}

    if not debug_str or debug_str.isspace():
        return module_levels

    # A plain level without any colon applies to every module
    if ":" not in debug_str:
        level = logging.getLevelName(debug_str.strip().upper())
        return {"": level} if isinstance(level, int) else module_levels

    for part in debug_str.split(","):
        if ":" not in part:
            continue

        module, level_name = part.rsplit(":", 1)
        level = logging.getLevelName(level_name.strip().upper())
        if not isinstance(level, int):
            continue

        module = module.strip().replace("/", ".")
        if module.startswith(f"{ROOT_LOGGER_NAME}."):
            module = module[len(ROOT_LOGGER_NAME) + 1 :]
        module = module.strip(".")

        module_levels[module] = level

    return module_levels


def _quiet_root_logger() -> None:
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)
    root_logger.propagate = False


def setup_logging() -> None:
    """
    Set up logging configuration based on environment variables.

    Environment Variables:
        PEER_ID_DEBUG
            Controls logging levels. Examples:
            - "DEBUG" (all modules at DEBUG level)
            - "peer_id.id:DEBUG" (only the id module at DEBUG)
            - "id:DEBUG,crypto.rsa:INFO" (multiple modules, prefix optional)

        PEER_ID_DEBUG_FILE
            If set, log records are also written to this file. Records always
            go to stderr while PEER_ID_DEBUG is set.

    Without PEER_ID_DEBUG the ``peer_id`` logger only passes warnings and
    does not propagate to the root logger.
    """
    global _current_listener

    if _current_listener is not None:
        _current_listener.stop()
        _current_listener = None

    module_levels = _parse_debug_modules(os.environ.get("PEER_ID_DEBUG", ""))
    if not module_levels:
        _quiet_root_logger()
        return

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    log_file = os.environ.get("PEER_ID_DEBUG_FILE")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="w")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    queue_handler = logging.handlers.QueueHandler(log_queue)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(queue_handler)
    root_logger.propagate = False
    root_logger.setLevel(module_levels.get("", logging.INFO))

    for module, level in module_levels.items():
        if module:
            logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{module}")
            logger.handlers.clear()
            logger.addHandler(queue_handler)
            logger.setLevel(level)
            logger.propagate = False

    _current_listener = logging.handlers.QueueListener(
        log_queue, *handlers, respect_handler_level=True
    )
    _current_listener.start()


@atexit.register
def cleanup_logging() -> None:
    """Stop the queue listener on exit."""
    global _current_listener
    if _current_listener is not None:
        _current_listener.stop()
        _current_listener = None
