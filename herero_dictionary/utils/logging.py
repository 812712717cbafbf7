import logging
import logging.config
import re
from pathlib import Path
from typing import Optional

from herero_dictionary.config import settings

# Matches ANSI escape codes (colours, bold, ...)
ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")

DEFAULT_LOGGING_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "logging.ini"


class StripAnsiFilter(logging.Filter):
    """Remove ANSI colour codes from records written to log files."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if isinstance(record.msg, str):
            record.msg = ANSI_ESCAPE_RE.sub("", record.msg)
        return True


def attach_strip_ansi_to_file_handlers() -> None:
    """
    Attach StripAnsiFilter to every FileHandler on the root logger.

    Call after logging.config.fileConfig(...) so the handlers declared in
    logging.ini already exist.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.addFilter(StripAnsiFilter())


def configure_logging(config_path: Optional[Path] = None) -> bool:
    """
    Configure logging from logging.ini, falling back to basicConfig.

    Returns True when the ini file was used.
    """
    config_path = config_path or DEFAULT_LOGGING_CONFIG_PATH
    if config_path.exists():
        logging.config.fileConfig(
            config_path,
            defaults={"logfilename": settings.LOG_FILE},
            disable_existing_loggers=False,
        )
        attach_strip_ansi_to_file_handlers()
        return True

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return False
