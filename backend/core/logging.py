from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path


LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LOG_FILE_NAME = "timetable.log"

# Handlers installed here carry this name so a later call can find and replace them.
HANDLER_PREFIX = "timetable."

# Top-level packages of this app. They follow the app level; third-party loggers do not.
APP_LOGGERS = ("api", "core", "services", "main")


def resolve_level(environment: str, level: str | None = None) -> int:
    """LOG_LEVEL wins; otherwise INFO in production and DEBUG everywhere else."""
    if level:
        resolved = logging.getLevelName(level.strip().upper())
        if isinstance(resolved, int):
            return resolved
        raise ValueError(f"Unknown log level: {level!r}")
    return logging.INFO if (environment or "").strip().lower() == "production" else logging.DEBUG


def _file_handler(log_dir: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=2 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.set_name(HANDLER_PREFIX + "file")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(*, environment: str, level: str | None = None, log_dir: Path | None = None) -> list[logging.Handler]:
    """Install the console handler, plus a rotating file handler when ``log_dir`` is given.

    Calling it again replaces the handlers of the previous call and leaves foreign
    handlers (pytest's capture, uvicorn's own) alone. Returns the installed handlers.
    """
    app_level = resolve_level(environment, level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")

    root = logging.getLogger()
    for old in [h for h in root.handlers if (h.get_name() or "").startswith(HANDLER_PREFIX)]:
        root.removeHandler(old)
        old.close()

    console = logging.StreamHandler()
    console.set_name(HANDLER_PREFIX + "console")
    console.setLevel(app_level)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]
    if log_dir is not None:
        handlers.append(_file_handler(Path(log_dir), app_level, formatter))

    for handler in handlers:
        root.addHandler(handler)
    # Third-party libraries stay at INFO or above even when the app runs at DEBUG.
    root.setLevel(max(app_level, logging.INFO))
    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(app_level)

    logging.getLogger("uvicorn.access").setLevel(max(app_level, logging.INFO))
    # SQL echo at DEBUG drowns out the request log.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handlers
