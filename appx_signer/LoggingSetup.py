# appx_signer/LoggingSetup.py
import sys
import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler

LOG_FILE_NAME = "appx_signer.log"
LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(message)s'
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def use_utf8_console() -> None:
    """
    Switches the process console streams to UTF-8 with replacement.

    SDK tool output is decoded as UTF-8 and echoed by ProcessInvoker; a
    publisher or file name outside the console code page must not raise
    UnicodeEncodeError mid-stage. Streams are reconfigured in place, so
    anything already holding sys.stdout keeps a working reference.
    """
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, 'reconfigure', None)
        if reconfigure is not None:
            reconfigure(encoding='utf-8', errors='replace', line_buffering=True)


def setup_logging(logs_dir: Path, verbose: bool = False, is_frozen: bool = False) -> Path:
    """
    Configure the root logger for a packaging run.

    Every record goes to a rotating file in logs_dir. A stderr handler is
    added when running from a terminal; it only shows warnings unless
    verbose is set, because the console already carries the operator
    prompts and the streamed SDK tool output.

    Args:
        logs_dir: Directory to store log files
        verbose: If True, DEBUG in the file and on the console
        is_frozen: If True, skip console setup (frozen app has no console)

    Returns:
        Path to the active log file
    """
    if not is_frozen:
        use_utf8_console()

    logs_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    log_file = logs_dir / LOG_FILE_NAME
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    console_level = logging.DEBUG if verbose else logging.WARNING
    if not is_frozen:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    logging.info(f"Logging to {log_file}: console={logging.getLevelName(console_level)}, frozen={is_frozen}")
    return log_file
