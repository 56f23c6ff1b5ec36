"""Exceptions raised while rendering feeds."""
from typing import Optional


class FeedError(Exception):
    """Base class for every feedforge failure."""


class SerializationError(FeedError):
    """The XML/JSON encoder could not serialize a built feed tree."""


class FeedWriteError(FeedError):
    """The output sink failed while a document was being streamed.

    ``cause`` is the exception raised by the sink and ``writes`` the number of
    write calls that succeeded before it.  Output already written is
    incomplete and must not be treated as a valid document.
    """

    def __init__(self, cause: BaseException, writes: int = 0, fmt: Optional[str] = None):
        self.cause = cause
        self.writes = writes
        self.fmt = fmt
        where = f" ({fmt})" if fmt else ""
        super().__init__(f"Output write failed after {writes} writes{where}: {cause}")


class UnknownFormatError(FeedError, ValueError):
    """No formatter is registered under the requested name."""
