from typing import List, Tuple

from shellwords import Shlex


def words_with_line_no(sh: Shlex) -> List[Tuple[str, int]]:
    """Drain `sh` and record the line number after each word."""
    return [(word, sh.line_no) for word in sh]


def iter_bytes(s: str):
    """Yield the bytes of `s` one at a time, like a streaming source."""
    yield from s.encode("utf-8")
