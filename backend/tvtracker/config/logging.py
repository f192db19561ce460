import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

MAX_BYTES = 5 * 1024 * 1024

BACKUP_COUNT = 1

OPERATIONS_LOGGER = "tvtracker.operations"

_configured = False


def setup_logging(log_dir: Optional[str] = "logs"):
    global _configured
    if _configured:
        return

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    if log_dir:
        logs_path = Path(log_dir)
        logs_path.mkdir(parents=True, exist_ok=True)

        info_handler = RotatingFileHandler(
            logs_path / "info.log",
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT
        )
        info_handler.setLevel(logging.INFO)
        info_handler.setFormatter(formatter)

        error_handler = RotatingFileHandler(
            logs_path / "error.log",
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)

        root_logger.addHandler(info_handler)
        root_logger.addHandler(error_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    _configured = True
    logging.info("Logging system initialized")


def log_operation(operation: str, **details):
    """Log a named operation with its context as key=value pairs."""
    context = " ".join(f"{key}={value}" for key, value in details.items())
    logging.getLogger(OPERATIONS_LOGGER).info("%s %s", operation, context)
