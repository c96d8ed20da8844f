"""Opt-in loguru output for textclf.

textclf logs through loguru but stays silent until a caller asks for output.
Tree construction is reported at DEBUG, pruning at INFO, each classification at
TRACE, and rejected input at WARNING just before the error is raised.
`enable_logging()` turns the package logger on and routes its records to
stderr; the returned handle turns it off again.

Note:
    Importing textclf drops loguru's stock stderr handler (ID 0) so that
    records are not printed twice once `enable_logging()` adds its own sink.
    Applications that configure loguru themselves should add their handlers
    after importing textclf.
"""

from __future__ import annotations

import contextlib
import sys
import threading
from typing import TYPE_CHECKING, ClassVar, Final, Literal, TypeAlias

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

# Loguru ships with a stderr handler at ID 0; it is already gone if the host removed it.
with contextlib.suppress(ValueError):
    logger.remove(0)

LogLevel: TypeAlias = Literal[
    "TRACE",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

LogFormat: TypeAlias = Literal["short", "full"]

# `{extra}` prints the keyword fields given to each textclf logger call.
_FORMATS: Final[dict[LogFormat, str]] = {
    "short": (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
        "<cyan>{function}</cyan> - "
        "<level>{message}</level> {extra}"
    ),
    "full": (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level> {extra}"
    ),
}


class LoggingHandle:
    """One stderr sink added by `enable_logging`.

    Handles are independent: several can be open at once, and the package
    logger is switched off only when the last of them is disabled.

    Attributes:
        handler_id (int | None): Loguru handler ID, or None once disabled.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     classifier = TextClassifier(vectorizer, splitter)

        >>> handle = enable_logging()  # doctest: +SKIP
        >>> classifier.prune(2)  # doctest: +SKIP
        >>> handle.disable()  # doctest: +SKIP
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        """Register `handler_id` as an open textclf sink.

        Args:
            handler_id (int): ID returned by `logger.add`.
        """
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's sink. Calling it again does nothing.

        Disabling the last open handle also silences the textclf logger.
        """
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        """Return this handle.

        Returns:
            LoggingHandle: This handle instance.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Disable the handle on leaving the block, whether or not it raised.

        Args:
            exc_type (type[BaseException] | None): The exception type, if raised.
            exc_val (BaseException | None): The exception instance, if raised.
            exc_tb (TracebackType | None): The traceback, if raised.
        """
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Return how many handles are still open.

        Returns:
            int: Number of handles not yet disabled.
        """
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = "INFO",
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Print textclf records to stderr until the returned handle is disabled.

    Args:
        level (LogLevel): Lowest level printed. "INFO" (default) reports
            pruning; "DEBUG" adds tree construction; "TRACE" adds every
            classification.
        log_format (LogFormat): "short" (default) prefixes each record with
            the function name; "full" uses module:function:line.

    Returns:
        LoggingHandle: Handle that removes the sink again.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_textclf_record,
        format=_FORMATS[log_format],
    )
    return LoggingHandle(handler_id)


def _is_textclf_record(record: Record) -> bool:
    """Keep only records logged from inside the textclf package."""
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
