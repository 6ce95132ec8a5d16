"""
Logging setup for EventBoard using loguru.

Every record carries a ``request`` extra ("-" outside a request). Handlers
that know the request bind it through ``request_logger`` so failures can be
traced back to the method and path that caused them.
"""
import sys
from loguru import logger
from starlette.requests import Request
from eventboard.core.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[request]}</magenta> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[request]} | {name}:{function}:{line} - {message}"


def _level() -> str:
    if settings.LOG_LEVEL:
        return settings.LOG_LEVEL.upper()
    return "DEBUG" if settings.ENVIRONMENT == "development" else "INFO"


logger.remove()
logger.configure(extra={"request": "-"})

logger.add(sys.stdout, format=CONSOLE_FORMAT, level=_level(), colorize=True)

if settings.ENVIRONMENT == "production":
    logger.add(
        "logs/eventboard.log",
        rotation="100 MB",
        retention="14 days",
        compression="zip",
        format=FILE_FORMAT,
        level=_level(),
    )


def request_logger(request: Request):
    """Logger with the request's method and path bound."""
    return logger.bind(request=f"{request.method} {request.url.path}")


__all__ = ["logger", "request_logger"]
