import structlog

from config.env import env

LOG_LEVEL = env("LOG_LEVEL", default="INFO")

timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
pre_chain = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    timestamper,
]

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        *pre_chain,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "logfmt_formatter": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.LogfmtRenderer(),
            "foreign_pre_chain": pre_chain,
        },
    },
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "logfmt_formatter",
        },
    },
    "root": {"level": LOG_LEVEL, "handlers": ["default"]},
    "loggers": {
        "django": {"level": "INFO", "handlers": ["default"], "propagate": False},
        "src": {"level": LOG_LEVEL, "handlers": ["default"], "propagate": False},
        # request lines for every refresh URL are noise at INFO
        "httpx": {"level": "WARNING", "handlers": ["default"], "propagate": False},
    },
}
