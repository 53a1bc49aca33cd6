import logging

from .core import (
    EndOfStringBackslashError,
    Shlex,
    SplitError,
    UnclosedDoubleQuoteError,
    UnclosedSingleQuoteError,
)
from .parser import join, quote, split

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EndOfStringBackslashError",
    "Shlex",
    "SplitError",
    "UnclosedDoubleQuoteError",
    "UnclosedSingleQuoteError",
    "join",
    "quote",
    "split",
]
