"""Opt-in logging for mushtree.

mushtree logs through loguru and is disabled by default (see the package
``__init__``).  Only the dataset loader and the estimator emit records; the
induction engine itself never logs.  Call :func:`enable_logging` to route
mushtree records to stderr.

Importing this module removes loguru's default handler (id 0), so configure
any application handlers after importing mushtree.
"""

from __future__ import annotations

import contextlib
import sys
from typing import TYPE_CHECKING, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

# Drop loguru's default stderr handler (id 0) so enable_logging() is the only
# sink for mushtree records. A no-op when the application already removed it.
with contextlib.suppress(ValueError):
    logger.remove(0)

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["short", "full"]

_FORMATS: Final[dict[str, str]] = {
    "short": (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{function}</cyan> - "
        "<level>{message}</level>"
    ),
    "full": (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    ),
}


class LoggingHandle:
    """Handle returned by :func:`enable_logging`.

    Removes its handler and re-disables mushtree logging on :meth:`disable`,
    or automatically when used as a context manager.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     records = load_records("mushroom.csv")
    """

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id

    def disable(self) -> None:
        if self.handler_id is None:
            return
        with contextlib.suppress(ValueError):
            logger.remove(self.handler_id)
        self.handler_id = None
        logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()


def enable_logging(*, level: LogLevel = "INFO", log_format: LogFormat = "short") -> LoggingHandle:
    """Enable mushtree logging on stderr.

    Args:
        level (LogLevel): Minimum level to display. ``"DEBUG"`` also shows
            skipped CSV rows and split sizes.
        log_format (LogFormat): ``"short"`` shows the function name only;
            ``"full"`` shows module:function:line.

    Returns:
        LoggingHandle: Handle managing the added handler.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_mushtree_record,
        format=_FORMATS[log_format],
    )
    return LoggingHandle(handler_id)


def _is_mushtree_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
