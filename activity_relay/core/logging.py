import logging
import sys

HANDLER_NAME = "activity-relay"

# httpx logs every Bot API URL, token included
NOISY_LOGGERS = ("httpx", "httpcore", "telegram.ext")


def setup_logging(level: str = "INFO", service_name: str = HANDLER_NAME) -> logging.Handler:
    root = logging.getLogger()
    for existing in root.handlers:
        if existing.get_name() == HANDLER_NAME:
            return existing

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            fmt=f"%(asctime)s [%(levelname)s] {service_name} %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
