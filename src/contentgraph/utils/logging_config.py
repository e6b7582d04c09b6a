"""
Logging configuration for contentgraph.

Records emitted while a pipeline stage runs carry the stage name: the
pipeline wraps every stage in `log_stage`, and `StageFilter` copies the
active name onto each record for the formatters below.
"""

import contextvars
import logging
import logging.handlers
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from ..settings import AppSettings

CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(stage_prefix)s%(message)s"

_current_stage: contextvars.ContextVar[str] = contextvars.ContextVar("stage", default="")


@contextmanager
def log_stage(name: str) -> Iterator[None]:
    """Tag every record logged inside the block with a stage name."""
    token = _current_stage.set(name)
    try:
        yield
    finally:
        _current_stage.reset(token)


class StageFilter(logging.Filter):
    """Adds ``stage`` and ``stage_prefix`` attributes to records."""

    def filter(self, record: logging.LogRecord) -> bool:
        stage = _current_stage.get()
        record.stage = stage
        record.stage_prefix = f"[{stage}] " if stage else ""
        return True


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().formatMessage(record)

        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = plain


class CSVFormatter(logging.Formatter):
    """Semicolon separated build log rows.

    Columns: timestamp, level, elapsed ms, stage, logger, line, message.
    """

    def format(self, record: logging.LogRecord) -> str:
        fields = [
            self.formatTime(record, self.datefmt),
            f"{int(record.relativeCreated)} ms",
            getattr(record, "stage", ""),
            record.name,
            str(record.lineno),
            record.getMessage(),
        ]
        if record.exc_info:
            fields[-1] += "\n" + self.formatException(record.exc_info)
        quoted = ['"' + value.replace('"', '""') + '"' for value in fields]
        quoted.insert(1, record.levelname.ljust(8))
        return ";".join(quoted)


def setup_logging(settings: "AppSettings", console_level: Optional[str] = None) -> None:
    """
    Configure the root logger for a build run.

    Args:
        settings: AppSettings providing the console and build log options
        console_level: Overrides the configured console level for this run
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    logging.getLogger("contentgraph").setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    stage_filter = StageFilter()
    level_name = (console_level or settings.console_log_level).upper()

    if settings.console_logging:
        formatter_class = ColoredFormatter if settings.console_use_colors else logging.Formatter
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, level_name, logging.INFO))
        console_handler.setFormatter(formatter_class(fmt=CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        console_handler.addFilter(stage_filter)
        root_logger.addHandler(console_handler)

    log_path = None
    if settings.file_logging:
        log_settings = settings.logging
        log_path = settings.log_file_path
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=log_settings.max_bytes,
                backupCount=log_settings.backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            root_logger.warning(f"Could not setup build log at {log_path}: {e}")
            log_path = None
        else:
            file_handler.setLevel(getattr(logging, log_settings.file_log_level, logging.DEBUG))
            file_handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
            file_handler.addFilter(stage_filter)
            root_logger.addHandler(file_handler)

    # Pillow logs every chunk it decodes at DEBUG
    logging.getLogger("PIL").setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.debug(f"Console logging: {settings.console_logging} ({level_name})")
    if log_path is not None:
        logger.debug(f"Build log: {log_path.absolute()}")
