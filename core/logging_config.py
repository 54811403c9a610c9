import logging.config
import structlog
from pythonjsonlogger import jsonlogger
import coloredlogs

from core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

FIELD_STYLES = {
    'asctime': {'color': 'green'},
    'levelname': {'bold': True, 'color': 'cyan'},
    'name': {'color': 'white'},
}

LEVEL_STYLES = {
    'DEBUG': {'color': 'blue'},
    'INFO': {'color': 'green'},
    'WARNING': {'color': 'yellow'},
    'ERROR': {'color': 'red'},
    'CRITICAL': {'bold': True, 'color': 'red'}
}


def setup_logging(json_logs: bool = False, level: str | None = None):
    """Route forum and SQLAlchemy logs to one stream handler.

    JSON lines when json_logs is set (for log shippers), coloured text otherwise.
    """
    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()
    handler = "json" if json_logs else "console"

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "fmt": LOG_FORMAT,
            },
            "colored": {
                "()": coloredlogs.ColoredFormatter,
                "fmt": LOG_FORMAT,
                "field_styles": FIELD_STYLES,
                "level_styles": LEVEL_STYLES,
            },
        },
        "handlers": {
            handler: {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_logs else "colored",
            },
        },
        "loggers": {
            "": {"handlers": [handler], "level": level},
            # SQL echo goes through this logger when DB_ECHO is on
            "sqlalchemy.engine": {"level": "INFO" if settings.DB_ECHO else "WARNING"},
            "uvicorn.access": {"level": "WARNING"},
        },
    })

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
