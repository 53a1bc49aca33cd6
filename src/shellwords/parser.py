import re
from typing import Iterable, List

from .core import Shlex, Source

# Characters that force a word to be quoted
METACHARACTERS = "|&;<>()$`\\\"' \t\r\n*?[#~=%"

_find_unsafe = re.compile("[" + re.escape(METACHARACTERS) + "]").search
_escape = re.compile(r'([$`"\\])').sub


def split(s: Source, encoding: str = "utf-8") -> List[str]:
    """
    Split `s` into words using the syntax of the POSIX shell.

    Raises the first `SplitError` encountered; no words are returned in that case.
    """
    return list(Shlex(s, encoding=encoding))


def quote(s: str) -> str:
    """Return a shell-escaped version of `s` that `split` turns into exactly one word."""
    if s == "":
        return '""'

    if _find_unsafe(s) is None:
        return s

    return '"' + _escape(r"\\\1", s) + '"'


def join(seq_of_str: Iterable[str]) -> str:
    """Quote each word in `seq_of_str` and join them with a single space."""
    return " ".join(quote(arg) for arg in seq_of_str)
