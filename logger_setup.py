# Module for setting up logging
import logging
import sys
import os

FILE_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
CONSOLE_FORMAT = '%(levelname)s - %(message)s'


def _open_log_file(log_file):
    """File handler recording everything, including per-asset debug lines."""
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(log_file, level=logging.INFO):
    """
    Logs to log_file at DEBUG and to stdout at `level`.

    The connection pool chatter of urllib3 (one line per asset request) is kept
    out unless `level` is DEBUG. Failure to open the log file is fatal.
    Returns the root logger.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Setup may run more than once in one process
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    try:
        root_logger.addHandler(_open_log_file(log_file))
    except OSError as e:
        print(f"Error: Could not set up file logging to {log_file}: {e}", file=sys.stderr)
        sys.exit(1)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    logging.getLogger('urllib3').setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)

    logging.debug(f"Logging to {log_file} (console level {logging.getLevelName(level)})")
    return root_logger
