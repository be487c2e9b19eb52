"""Runtime logging helpers."""

from __future__ import annotations

import inspect
import logging
import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "cli"]

_DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_CONFIGURED: tuple[LogProfile, str] | None = None


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging messages to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _build_cli_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def parse_log_filter(filter_str: str) -> tuple[str, dict[str | None, str | int | bool]]:
    """Parse a log filter string.

    Format: "level" or "level,module1=level,module2=level"
    Examples:
        - "info" - global INFO level
        - "info,rowpoly.core=debug" - global INFO, rowpoly.core at DEBUG
        - "debug,rowpoly.core.rows=false" - global DEBUG, row engine silenced

    Returns:
        (global_level, module_filter_dict)
    """
    parts = [p.strip() for p in filter_str.lower().split(",") if p.strip()]

    filter_dict: dict[str | None, str | int | bool] = {}
    global_level = "info"

    for part in parts:
        if "=" in part:
            module, level = part.split("=", 1)
            module = module.strip()
            level = level.strip()
            if level == "false":
                filter_dict[module] = False
            else:
                filter_dict[module] = level.upper()
        else:
            global_level = part

    return global_level, filter_dict


def _setup_stdlib_intercept() -> None:
    """Forward stdlib logging to loguru."""
    root_logger = logging.getLogger()
    if not any(isinstance(h, InterceptHandler) for h in root_logger.handlers):
        root_logger.addHandler(InterceptHandler())


def configure_logging(*, profile: LogProfile = "default", log_filter: str = "info") -> None:
    """Configure process-level logging once per (profile, filter) pair."""
    global _CONFIGURED
    if _CONFIGURED == (profile, log_filter):
        return

    global_level, module_filter = parse_log_filter(log_filter)
    # The filter decides per module; the sink itself lets everything through
    module_filter.setdefault("", global_level.upper())

    logger.remove()

    if profile == "cli":
        logger.add(
            _build_cli_handler(),
            level="TRACE",
            format="{message}",
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )
    else:
        logger.add(
            sys.stderr,
            level="TRACE",
            format=_DEFAULT_FORMAT,
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )

    _setup_stdlib_intercept()

    _CONFIGURED = (profile, log_filter)
