import logging
import logging.config
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = "INFO"

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LevelColourFormatter(logging.Formatter):
    """Colours the level name; plain output when colours are off or stdout is not a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[90m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[31;1m",
    }
    RESET = "\x1b[0m"

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_colors: bool | None = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        if use_colors is None:
            use_colors = sys.stdout.isatty()
        self.use_colors = use_colors

    def formatMessage(self, record: logging.LogRecord) -> str:
        colour = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_colors or colour is None:
            return super().formatMessage(record)
        # The record is shared with other handlers, so colour a copy of its fields
        fields = dict(record.__dict__, levelname=f"{colour}{record.levelname}{self.RESET}")
        return self._style._fmt % fields


def resolve_log_level(raw: str | None) -> str:
    level = (raw or DEFAULT_LOG_LEVEL).strip().upper()
    if level not in _LEVEL_NAMES:
        return DEFAULT_LOG_LEVEL
    return level


def get_logging_config() -> dict:
    log_level = resolve_log_level(os.getenv("LOG_LEVEL"))
    log_dir = os.getenv("LOG_DIR")
    use_colors = False if os.getenv("NO_COLOR") else None

    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": "console",
        },
    }
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": os.path.join(log_dir, "app.log"),
            "formatter": "file",
        }

    handler_names = list(handlers)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "()": "ledger_feed.logger.LevelColourFormatter",
                "fmt": LOG_FORMAT,
                "use_colors": use_colors,
            },
            "file": {"format": LOG_FORMAT},
        },
        "handlers": handlers,
        "loggers": {
            "": {"handlers": handler_names, "level": log_level},
            **{
                name: {"handlers": handler_names, "level": "INFO", "propagate": False}
                for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
            },
        },
    }


def setup_logging() -> None:
    logging.config.dictConfig(get_logging_config())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
