# edudesk/core/logging.py
import logging
import sys

import structlog

from edudesk.core.config import settings

def setup_logging(level: str | None = None, json_logs: bool | None = None):
    level_name = (level or settings.LOG_LEVEL).upper()
    level_no = logging.getLevelName(level_name)
    if not isinstance(level_no, int):
        level_no = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level_no)

    use_json = settings.LOG_JSON if json_logs is None else json_logs
    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        logger_factory=structlog.PrintLoggerFactory(),
    )

log = structlog.get_logger("edudesk")
