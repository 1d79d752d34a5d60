"""Sets of Unicode codepoints and the charset description syntax."""

from __future__ import annotations

import os
import string
from enum import Enum, auto
from typing import Callable, Iterable, Iterator, Union

PathLike = Union[str, "os.PathLike[str]"]


class CharsetError(ValueError):
    """Raised when a charset description is malformed."""


_DIGITS = frozenset(b"0123456789")
_WORD_CHARS = frozenset(
    (string.ascii_letters + string.digits + "_").encode("ascii")
)
_WHITESPACE = frozenset(b" \n\r\t")
_HEX_DIGITS = frozenset(string.hexdigits)

_ESCAPES = {
    ord("0"): 0,
    ord("n"): 10,
    ord("N"): 10,
    ord("r"): 13,
    ord("R"): 13,
    ord("s"): 32,
    ord("S"): 32,
    ord("t"): 9,
    ord("T"): 9,
}


class _State(Enum):
    CLEAR = auto()
    TIGHT = auto()
    RANGE_BRACKET = auto()
    RANGE_START = auto()
    RANGE_SEPARATOR = auto()
    RANGE_END = auto()


_VALUE_STATES = (_State.CLEAR, _State.RANGE_BRACKET, _State.RANGE_SEPARATOR)


class _ByteReader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def read(self) -> int:
        """Return the next byte, or -1 at the end."""
        if self._pos >= len(self._data):
            return -1
        c = self._data[self._pos]
        self._pos += 1
        return c

    def read_word(self, prefix: bytes = b"") -> tuple[bytes, int]:
        """Read word characters; return them and the byte that ended the word."""
        word = bytearray(prefix)
        while True:
            c = self.read()
            if c in _WORD_CHARS:
                word.append(c)
            else:
                return bytes(word), c

    def read_string(self, terminator: int) -> bytes:
        """Read an escaped string up to the terminator, which is consumed."""
        out = bytearray()
        escape = False
        while True:
            c = self.read()
            if c < 0:
                raise CharsetError("unterminated literal")
            if escape:
                out.append(_ESCAPES.get(c, c))
                escape = False
            elif c == terminator:
                return bytes(out)
            elif c == ord("\\"):
                escape = True
            else:
                out.append(c)


def _parse_int(word: bytes) -> int:
    text = word.decode("ascii")
    if text[:2] in ("0x", "0X"):
        digits = text[2:]
        if not all(ch in _HEX_DIGITS for ch in digits):
            raise CharsetError(f"invalid hexadecimal number {text!r}")
        return int(digits, 16) if digits else 0
    if not all(ch in string.digits for ch in text):
        raise CharsetError(f"invalid number {text!r}")
    return int(text)


def _decode_text(raw: bytes) -> str:
    # A NUL byte ends the text, as an escaped \0 does.
    raw = raw.split(b"\0", 1)[0]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CharsetError("invalid UTF-8 in literal") from exc


def _parse_charset(
    data: bytes,
    add: Callable[[int], None],
    include: Callable[[str], None],
    disable_char_literals: bool,
) -> None:
    reader = _ByteReader(data)
    state = _State.CLEAR
    range_start = 0

    def add_value(cp: int, state: _State) -> _State:
        nonlocal range_start
        if state is _State.CLEAR:
            if cp > 0 or (cp == 0 and is_number):
                add(cp)
            return _State.TIGHT
        if state is _State.RANGE_BRACKET:
            range_start = cp
            return _State.RANGE_START
        for u in range(range_start, cp + 1):
            add(u)
        return _State.RANGE_END

    start = True
    c = reader.read()
    while c >= 0:
        first, start = start, False
        is_number = False
        if c in _DIGITS:
            if state not in _VALUE_STATES:
                raise CharsetError("unexpected number")
            word, c = reader.read_word(bytes([c]))
            is_number = True
            state = add_value(_parse_int(word), state)
            continue  # the next byte has already been read
        if c == ord("'"):
            if state not in _VALUE_STATES or disable_char_literals:
                raise CharsetError("unexpected character literal")
            text = _decode_text(reader.read_string(ord("'")))
            if len(text) != 1:
                raise CharsetError("character literal must hold exactly one character")
            state = add_value(ord(text), state)
        elif c == ord('"'):
            if state is not _State.CLEAR or disable_char_literals:
                raise CharsetError("unexpected string literal")
            for ch in _decode_text(reader.read_string(ord('"'))):
                add(ord(ch))
            state = _State.TIGHT
        elif c == ord("["):
            if state is not _State.CLEAR:
                raise CharsetError("unexpected '['")
            state = _State.RANGE_BRACKET
        elif c == ord("]"):
            if state is not _State.RANGE_END:
                raise CharsetError("unexpected ']'")
            state = _State.TIGHT
        elif c == ord("@"):
            if state is not _State.CLEAR:
                raise CharsetError("unexpected '@'")
            word, c = reader.read_word()
            if word != b"include":
                raise CharsetError(f"unknown annotation {word.decode('ascii')!r}")
            while c in _WHITESPACE:
                c = reader.read()
            if c != ord('"'):
                raise CharsetError("@include must be followed by a quoted path")
            path = reader.read_string(ord('"')).split(b"\0", 1)[0]
            include(path.decode("utf-8", errors="surrogateescape"))
            state = _State.TIGHT
        elif c in (ord(","), ord(";")):
            if state is _State.RANGE_START:
                state = _State.RANGE_SEPARATOR
            elif state is _State.TIGHT:
                state = _State.CLEAR
            elif state is not _State.CLEAR:
                raise CharsetError("unexpected separator")
        elif c in _WHITESPACE:
            if state is _State.TIGHT:
                state = _State.CLEAR
        elif c == 0xEF and first:
            if not (reader.read() == 0xBB and reader.read() == 0xBF):
                raise CharsetError("malformed byte order mark")
        else:
            raise CharsetError(f"unexpected byte 0x{c:02X}")
        c = reader.read()

    if state not in (_State.CLEAR, _State.TIGHT):
        raise CharsetError("unexpected end of charset")


def _combine_path(base_path: str, rel_path: str) -> str:
    if rel_path.startswith("/") or rel_path[1:2] == ":":
        return rel_path
    last_slash = max(base_path.rfind("/"), base_path.rfind("\\"))
    if last_slash < 0:
        return rel_path
    return base_path[: last_slash + 1] + rel_path


class Charset:
    """A set of Unicode codepoints, iterated in ascending order."""

    def __init__(self, codepoints: Iterable[int] = ()) -> None:
        self._codepoints: set[int] = set(codepoints)

    @classmethod
    def ascii(cls) -> "Charset":
        """Return the set of the 95 printable ASCII characters."""
        return cls(range(0x20, 0x7F))

    def add(self, codepoint: int) -> None:
        """Add a codepoint."""
        self._codepoints.add(codepoint)

    def remove(self, codepoint: int) -> None:
        """Remove a codepoint if present."""
        self._codepoints.discard(codepoint)

    def __len__(self) -> int:
        return len(self._codepoints)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._codepoints))

    def __contains__(self, codepoint: object) -> bool:
        return codepoint in self._codepoints

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Charset):
            return self._codepoints == other._codepoints
        return NotImplemented

    def __repr__(self) -> str:
        return f"Charset({sorted(self._codepoints)!r})"

    def load(self, filename: PathLike, disable_char_literals: bool = False) -> None:
        """Add the codepoints described by a charset file.

        Raises CharsetError on a syntax error and OSError if the file cannot be read.
        Codepoints read before an error remain in the set.
        """
        path = os.fspath(filename)
        with open(path, "rb") as f:
            data = f.read()

        def include(rel_path: str) -> None:
            # A failed include does not fail the including file.
            try:
                self.load(_combine_path(path, rel_path), disable_char_literals)
            except (CharsetError, OSError):
                pass

        _parse_charset(data, self.add, include, disable_char_literals)

    def parse(self, text: str | bytes, disable_char_literals: bool = False) -> None:
        """Add the codepoints described by a charset string; includes are ignored.

        Raises CharsetError on a syntax error. Codepoints read before an error remain in the set.
        """
        data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        _parse_charset(data, self.add, lambda _path: None, disable_char_literals)