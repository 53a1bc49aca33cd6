import logging
from typing import Iterable, Iterator, Optional, Union

log = logging.getLogger(__name__)

# Byte classes. Everything outside of these is copied into words unchanged.
WHITESPACE = b" \t\n"
DOUBLE_QUOTE_ESCAPES = b'$`"\\'
SINGLE_QUOTE_ESCAPES = b"'\\"

_NEWLINE = ord("\n")
_BACKSLASH = ord("\\")
_DOUBLE_QUOTE = ord('"')
_SINGLE_QUOTE = ord("'")
_COMMENT = ord("#")

Source = Union[str, bytes, bytearray, memoryview, Iterable[int], Iterable[bytes]]


class SplitError(ValueError):
    """Base class for errors raised while splitting input into words."""

    description = "Invalid input"

    def __init__(self, line_no: int) -> None:
        self.line_no = line_no
        super().__init__(f"{self.description} (line {line_no})")


class EndOfStringBackslashError(SplitError):
    """The input ends with an unescaped backslash."""

    description = "Input ends with an unescaped backslash"


class UnclosedDoubleQuoteError(SplitError):
    """The input has an unmatched `"`."""

    description = "Unclosed double quote"


class UnclosedSingleQuoteError(SplitError):
    """The input has an unmatched `'`."""

    description = "Unclosed single quote"


def _check_encoding(encoding: str) -> None:
    special = " \t\n\"'\\#"
    if special.encode(encoding) != special.encode("ascii"):
        raise ValueError(f"Encoding {encoding!r} is not ASCII-compatible")


def _iter_chunks(source: Iterable) -> Iterator[int]:
    for item in source:
        if isinstance(item, int):
            yield item
        elif isinstance(item, (bytes, bytearray)):
            yield from item
        else:
            raise TypeError(
                f"Expected byte values or bytes chunks, got {type(item).__name__}"
            )


def _iter_bytes(source: Source) -> Iterator[int]:
    if isinstance(source, str):
        return iter(source.encode("utf-8"))
    if isinstance(source, (bytes, bytearray)):
        return iter(source)
    if isinstance(source, memoryview):
        return iter(source.cast("B"))
    # Binary files yield lines of bytes
    return _iter_chunks(source)


class Shlex:
    """
    Split an input into words using the syntax of the POSIX shell.

    Words are produced lazily by iterating over the instance. The input is
    consumed byte by byte and never rewound, so `source` may be a `str`, a
    bytes-like object or any iterable of byte values and/or bytes chunks
    (e.g. a generator or a file opened in binary mode).

    Unlike POSIX, a backslash inside single quotes escapes `'` and `\\`.
    Carriage returns are not treated as whitespace.

    Args:
        source: The input to split. A `str` is always scanned as UTF-8.
        encoding (str, optional): Encoding of a bytes source, used to decode the
            produced words. Must be ASCII-compatible. Defaults to "utf-8".

    Raises:
        ValueError: If `encoding` is not ASCII-compatible.

    Raises (while iterating):
        EndOfStringBackslashError, UnclosedDoubleQuoteError, UnclosedSingleQuoteError.
        The first error ends the iteration.
    """

    def __init__(self, source: Source, encoding: str = "utf-8") -> None:
        _check_encoding(encoding)
        self._iter = _iter_bytes(source)
        self.encoding = "utf-8" if isinstance(source, str) else encoding

        #: The number of newlines read so far, plus one.
        self.line_no = 1

        self._exhausted = False

    def __iter__(self) -> "Shlex":
        return self

    def __next__(self) -> str:
        if self._exhausted:
            raise StopIteration

        ch = self._next_char()

        # Skip whitespace and comments
        while ch is not None and (ch in WHITESPACE or ch == _COMMENT):
            if ch == _COMMENT:
                while ch is not None and ch != _NEWLINE:
                    ch = self._next_char()
                if ch is None:
                    break
            ch = self._next_char()

        if ch is None:
            self._exhausted = True
            raise StopIteration

        try:
            return self._parse_word(ch)
        except SplitError as exc:
            self._exhausted = True
            log.debug("Splitting failed: %s", exc)
            raise

    def _next_char(self) -> Optional[int]:
        ch = next(self._iter, None)
        if ch == _NEWLINE:
            self.line_no += 1
        return ch

    def _parse_word(self, ch: int) -> str:
        result = bytearray()
        while True:
            if ch == _DOUBLE_QUOTE:
                self._parse_double(result)
            elif ch == _SINGLE_QUOTE:
                self._parse_single(result)
            elif ch == _BACKSLASH:
                ch2 = self._next_char()
                if ch2 is None:
                    raise EndOfStringBackslashError(self.line_no)
                # \<newline> is a line continuation
                if ch2 != _NEWLINE:
                    result.append(ch2)
            elif ch in WHITESPACE:
                break
            else:
                result.append(ch)

            ch = self._next_char()
            if ch is None:
                break

        return result.decode(self.encoding)

    def _parse_double(self, result: bytearray) -> None:
        while True:
            ch = self._next_char()
            if ch is None:
                raise UnclosedDoubleQuoteError(self.line_no)

            if ch == _DOUBLE_QUOTE:
                return

            if ch == _BACKSLASH:
                ch2 = self._next_char()
                if ch2 is None:
                    raise EndOfStringBackslashError(self.line_no)
                if ch2 in DOUBLE_QUOTE_ESCAPES:
                    result.append(ch2)
                elif ch2 != _NEWLINE:
                    # Not an escape: keep the backslash
                    result.append(_BACKSLASH)
                    result.append(ch2)
            else:
                result.append(ch)

    def _parse_single(self, result: bytearray) -> None:
        while True:
            ch = self._next_char()
            if ch is None:
                raise UnclosedSingleQuoteError(self.line_no)

            if ch == _SINGLE_QUOTE:
                return

            if ch == _BACKSLASH:
                ch2 = self._next_char()
                if ch2 is None:
                    raise EndOfStringBackslashError(self.line_no)
                if ch2 not in SINGLE_QUOTE_ESCAPES:
                    result.append(_BACKSLASH)
                result.append(ch2)
            else:
                result.append(ch)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} line_no={self.line_no}>"
