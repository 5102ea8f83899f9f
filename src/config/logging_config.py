import logging.config

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging for the process. Call once at start-up."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "simple": {"format": _FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "simple",
                    "level": level.upper(),
                },
            },
            "root": {"handlers": ["console"], "level": level.upper()},
            "loggers": {
                "httpx": {"level": "WARNING"},
                "apscheduler": {"level": "WARNING"},
            },
        }
    )
