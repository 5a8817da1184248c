"""Logging setup for the HTTP service.

Console output always; when `Settings.log_dir` is set, also
- info.log: INFO and above
- error.log: ERROR and above
"""

import logging
import sys

from docx_template.core.config import Settings

# Marks handlers installed here so repeated setup replaces only its own
_HANDLER_TAG = "_docx_template_handler"


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logging(settings: Settings) -> logging.Logger:
    """Install console and optional file handlers on the root logger.

    Handlers added by other code (test runners, uvicorn) are kept.

    Args:
        settings: Supplies log_level and log_dir.

    Returns:
        The configured root logger.
    """
    level = getattr(logging, settings.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in [h for h in root_logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = _tagged(logging.StreamHandler(sys.stdout))
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    if settings.log_dir is None:
        return root_logger

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    for filename, file_level in (("info.log", logging.INFO), ("error.log", logging.ERROR)):
        handler = _tagged(
            logging.FileHandler(settings.log_dir / filename, encoding="utf-8")
        )
        handler.setLevel(file_level)
        handler.setFormatter(detailed_formatter)
        root_logger.addHandler(handler)

    return root_logger
