"""结构化日志配置（structlog，输出到 stderr，不干扰 CLI 的表格/CSV 输出）"""
import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict

from config.settings import LOG_LEVEL


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(log_level: str = LOG_LEVEL) -> None:
    """配置标准 logging 与 structlog，可重复调用"""
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    logging.basicConfig(
        format="%(message)s",
        handlers=[handler],
        level=numeric_level,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
