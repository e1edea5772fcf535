import logging
from pathlib import Path

from .config import BASE_DIR, Settings, get_settings

SMS_LOGGER_NAME = "sms_dispatch.sms"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _resolve_log_path(raw_path: str) -> Path:
    log_path = Path(raw_path)
    if not log_path.is_absolute():
        log_path = BASE_DIR / log_path
    return log_path


def _has_file_handler(logger: logging.Logger, log_path: Path) -> bool:
    target = str(log_path.resolve())
    return any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == target
        for handler in logger.handlers
    )


def configure_sms_logging(settings: Settings | None = None) -> logging.Logger:
    """Prepare the logger dispatchers write provider diagnostics to.

    Applies ``LOG_LEVEL`` and attaches a file handler for ``LOG_FILE_PATH``
    once per path. Records still propagate to the application's root handlers.
    """

    settings = settings or get_settings()
    logger = logging.getLogger(SMS_LOGGER_NAME)
    logger.setLevel(settings.LOG_LEVEL)

    if settings.LOG_FILE_PATH:
        log_path = _resolve_log_path(settings.LOG_FILE_PATH)
        if not _has_file_handler(logger, log_path):
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_path, encoding="utf-8")
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)

    # httpx logs every request line at INFO, playSMS tokens included.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
