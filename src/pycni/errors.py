# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/09/21 15:11:38
# @Author : Kariko Lin

from enum import Enum


class ErrorKind(str, Enum):
    # lexical
    UNEXPECTED_CHARACTER = 'unexpected character'
    UNTERMINATED_RAW = 'unterminated raw value'
    UNTERMINATED_QUOTE = 'unterminated quoted value'
    INVALID_ESCAPE = 'invalid escape sequence'
    # structural
    EXPECTED_KEY = 'expected key'
    INVALID_KEY = 'invalid key'
    EXPECTED_EQUALS = 'expected "="'
    EXPECTED_SECTION_END = 'expected "]"'
    EXPECTED_LINE_END = 'expected end of line'
    UNEXPECTED_WHITESPACE = 'whitespace not allowed here'
    UNEXPECTED_CONTINUATION = 'continuation line without a value'
    MALFORMED_VALUE = 'malformed value'
    DUPLICATE_KEY = 'duplicate key'
    DUPLICATE_SECTION = 'duplicate section'
    # lookups and coercion
    MISSING_SECTION = 'no such section'
    MISSING_KEY = 'no such key'
    TYPE_MISMATCH = 'type mismatch'
    OVERFLOW = 'numeric overflow'

    @property
    def is_lexical(self) -> bool:
        return self in _LEXICAL


_LEXICAL = frozenset({
    ErrorKind.UNEXPECTED_CHARACTER,
    ErrorKind.UNTERMINATED_RAW,
    ErrorKind.UNTERMINATED_QUOTE,
    ErrorKind.INVALID_ESCAPE,
})


class CniError(Exception):
    """Base of everything this package raises on bad input or lookups.

    `line` and `col` count from 1, and are `None` when the failure has no
    place in the source (a lookup of something absent).
    """
    def __init__(
        self, kind: ErrorKind, detail: str = '', *,
        line: int | None = None, col: int | None = None
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.line = line
        self.col = col
        super().__init__(kind, detail, line, col)

    @property
    def pos(self) -> tuple[int, int] | None:
        if self.line is None or self.col is None:
            return None
        return self.line, self.col

    def __str__(self) -> str:
        msg = self.kind.value
        if self.detail:
            msg += f': {self.detail}'
        if self.pos is not None:
            msg = f'line {self.line}:{self.col}: {msg}'
        return msg


class LexicalError(CniError):
    pass


class StructuralError(CniError):
    """`original` is the earlier declaration a duplicate collides with."""
    def __init__(
        self, kind: ErrorKind, detail: str = '', *,
        line: int | None = None, col: int | None = None,
        original: tuple[int, int] | None = None
    ) -> None:
        super().__init__(kind, detail, line=line, col=col)
        self.original = original

    def __str__(self) -> str:
        msg = super().__str__()
        if self.original is not None:
            msg += ' (first declared at line %d:%d)' % self.original
        return msg


class MissingSectionError(CniError, KeyError):
    def __init__(self, section: str) -> None:
        super().__init__(ErrorKind.MISSING_SECTION, repr(section))
        self.section = section

    __str__ = CniError.__str__


class MissingKeyError(CniError, KeyError):
    def __init__(self, section: str, key: str) -> None:
        super().__init__(ErrorKind.MISSING_KEY, f'[{section}] {key!r}')
        self.section = section
        self.key = key

    __str__ = CniError.__str__


class TypeMismatchError(CniError, TypeError):
    pass


class CniOverflowError(CniError, OverflowError):
    pass


def raise_for(
    kind: ErrorKind, detail: str = '', *,
    line: int | None = None, col: int | None = None
) -> None:
    """Raise the exception class matching `kind` (lexical or structural)."""
    if kind.is_lexical:
        raise LexicalError(kind, detail, line=line, col=col)
    raise StructuralError(kind, detail, line=line, col=col)
