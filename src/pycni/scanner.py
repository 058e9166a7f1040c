# -*- encoding: utf-8 -*-
# @File   : scanner.py
# @Time   : 2026/09/24 20:12:50
# @Author : Kariko Lin

"""CNI text -> tokens.

The scanner only knows which characters make up what; whether the tokens
come in a sensible order is `parser`'s business. A malformed token turns
into a single `ERROR` token (the rest of that line is skipped) instead of
an exception, so the parser decides when to give up.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .consts import (
    ESCAPES, LIST_CLOSE, LIST_OPEN, LIST_SEP, RAW_QUOTE, STR_QUOTE,
    VERTICAL_WS, ValueStyle
)
from .errors import CniError, ErrorKind, LexicalError, StructuralError
from .model import Value
from .options import CORE, CniOpts, scans_as_key

_BOM = '\ufeff'
_HEX = frozenset('0123456789abcdefABCDEF')
# never part of a bare list item.
_ITEM_STOP = frozenset((LIST_SEP, LIST_OPEN, LIST_CLOSE, RAW_QUOTE, STR_QUOTE))


class TokenType(Enum):
    SECTION = auto()
    KEY = auto()
    EQUALS = auto()
    VALUE = auto()
    CONTINUATION = auto()
    COMMENT = auto()
    NEWLINE = auto()
    ERROR = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    line: int
    col: int
    value: Value | None = None
    kind: ErrorKind | None = None
    # `[ name ]`, only legal with flexspace.
    padded: bool = False


class Scanner:
    """Iterate once over the tokens of `text`. Always ends with `EOF`."""

    def __init__(self, text: str, opts: CniOpts = CORE) -> None:
        self._src = text[1:] if text.startswith(_BOM) else text
        self._opts = opts
        self._pos = 0
        self.line = 1
        self.col = 1
        self.__tokens = self._scan()

    def __iter__(self) -> Iterator[Token]:
        return self.__tokens

    def __next__(self) -> Token:
        return next(self.__tokens)

    # cursor

    def _peek(self) -> str | None:
        return self._src[self._pos] if self._pos < len(self._src) else None

    def _advance(self) -> str:
        c = self._src[self._pos]
        self._pos += 1
        if c == '\r' and self._peek() == '\n':
            # CRLF, the LF does the line counting.
            self.col += 1
        elif c in VERTICAL_WS:
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return c

    def _at_line_end(self) -> bool:
        c = self._peek()
        return c is None or c in VERTICAL_WS

    def _skip_spaces(self) -> bool:
        skipped = False
        while (c := self._peek()) is not None and self._opts.is_space(c):
            self._advance()
            skipped = True
        return skipped

    def _skip_line(self) -> None:
        while not self._at_line_end():
            self._advance()

    def _read_while(self, pred) -> str:
        start = self._pos
        while (c := self._peek()) is not None and pred(c):
            self._advance()
        return self._src[start:self._pos]

    def _token(self, type_: TokenType, text: str = '', **kw) -> Token:
        return Token(type_, text, self.line, self.col, **kw)

    # token loop

    def _scan(self) -> Iterator[Token]:
        while self._peek() is not None:
            yield from self._line()
        yield self._token(TokenType.EOF)

    def _line(self) -> Iterator[Token]:
        """One physical line, its line break included."""
        if self._opts.tabulation and self._peek() == '\t':
            self._skip_spaces()
            c = self._peek()
            if not (self._at_line_end() or self._opts.is_comment(c)):
                yield self._continuation()

        while True:
            self._skip_spaces()
            c = self._peek()
            if c is None:
                return
            if c in VERTICAL_WS:
                yield self._token(TokenType.NEWLINE, c)
                self._advance()
                if c == '\r' and self._peek() == '\n':
                    self._advance()
                return
            try:
                yield from self._statement(c)
            except CniError as e:
                yield Token(
                    TokenType.ERROR, e.detail,
                    e.line or self.line, e.col or self.col, kind=e.kind)
                self._skip_line()

    def _statement(self, c: str) -> Iterator[Token]:
        if self._opts.is_comment(c):
            tok = self._token(TokenType.COMMENT)
            text = self._read_while(lambda x: x not in VERTICAL_WS)
            yield Token(TokenType.COMMENT, text, tok.line, tok.col)
        elif c == '[':
            yield self._section()
        elif c == '=':
            yield self._token(TokenType.EQUALS, c)
            self._advance()
            self._skip_spaces()
            tok = self._token(TokenType.VALUE)
            value = self._value()
            yield Token(TokenType.VALUE, value.text, tok.line, tok.col, value)
        elif scans_as_key(c, self._opts):
            tok = self._token(TokenType.KEY)
            text = self._read_while(lambda x: scans_as_key(x, self._opts))
            yield Token(TokenType.KEY, text, tok.line, tok.col)
        else:
            raise LexicalError(
                ErrorKind.UNEXPECTED_CHARACTER, repr(c),
                line=self.line, col=self.col)

    def _section(self) -> Token:
        tok = self._token(TokenType.SECTION)
        self._advance()  # [
        padded = self._skip_spaces()
        name = self._read_while(lambda x: scans_as_key(x, self._opts))
        padded = self._skip_spaces() or padded
        if self._peek() != ']':
            raise StructuralError(
                ErrorKind.EXPECTED_SECTION_END, f'after "[{name}"',
                line=self.line, col=self.col)
        self._advance()
        return Token(TokenType.SECTION, name, tok.line, tok.col, padded=padded)

    def _continuation(self) -> Token:
        tok = self._token(TokenType.CONTINUATION)
        text = self._read_while(
            lambda x: x not in VERTICAL_WS and not self._opts.is_comment(x))
        return Token(
            TokenType.CONTINUATION, self._opts.strip(text), tok.line, tok.col)

    # values

    def _value(self) -> Value:
        match self._peek():
            case '`':
                return self._raw()
            case '"':
                return self._quoted()
            case '[':
                return self._list()
        # bare: up to a comment or the line end, edges trimmed.
        text = self._read_while(
            lambda x: x not in VERTICAL_WS and not self._opts.is_comment(x))
        return Value(self._opts.strip(text))

    def _raw(self) -> Value:
        line, col = self.line, self.col
        self._advance()  # `
        buf: list[str] = []
        while True:
            if self._peek() is None:
                raise LexicalError(
                    ErrorKind.UNTERMINATED_RAW, line=line, col=col)
            c = self._advance()
            if c != RAW_QUOTE:
                buf.append(c)
            elif self._peek() == RAW_QUOTE:
                buf.append(self._advance())
            else:
                return Value(''.join(buf), style=ValueStyle.RAW)

    def _quoted(self) -> Value:
        line, col = self.line, self.col
        self._advance()  # "
        buf: list[str] = []
        while True:
            if self._at_line_end():
                raise LexicalError(
                    ErrorKind.UNTERMINATED_QUOTE, line=line, col=col)
            if self._peek() == '\\':
                buf.append(self._escape(line, col))
                continue
            c = self._advance()
            if c == STR_QUOTE:
                return Value(''.join(buf), style=ValueStyle.QUOTED)
            buf.append(c)

    def _escape(self, quote_line: int, quote_col: int) -> str:
        line, col = self.line, self.col
        self._advance()  # \
        if self._at_line_end():
            raise LexicalError(
                ErrorKind.UNTERMINATED_QUOTE, line=quote_line, col=quote_col)
        c = self._peek()
        if c in ESCAPES:
            self._advance()
            return ESCAPES[c]
        if c == 'u':
            self._advance()
            digits = ''
            while len(digits) < 4 and self._peek() in _HEX:
                digits += self._advance()
            # no lone surrogates.
            if len(digits) == 4 and not 0xD800 <= int(digits, 16) <= 0xDFFF:
                return chr(int(digits, 16))
            c = 'u' + digits
        raise LexicalError(
            ErrorKind.INVALID_ESCAPE, f'\\{c}', line=line, col=col)

    def _list(self) -> Value:
        start, line, col = self._pos, self.line, self.col
        self._advance()  # [
        items: list[Value] = []
        self._skip_spaces()
        if self._peek() == LIST_CLOSE:
            self._advance()
        else:
            while True:
                self._skip_spaces()
                items.append(self._item())
                self._skip_spaces()
                c = self._peek()
                if c == LIST_SEP:
                    self._advance()
                elif c == LIST_CLOSE:
                    self._advance()
                    break
                else:
                    raise StructuralError(
                        ErrorKind.MALFORMED_VALUE,
                        f'list opened at {line}:{col} expects "," or "]"',
                        line=self.line, col=self.col)
        return Value(self._src[start:self._pos], tuple(items))

    def _item(self) -> Value:
        match self._peek():
            case '`':
                return self._raw()
            case '"':
                return self._quoted()
            case '[':
                return self._list()
        line, col = self.line, self.col
        text = self._opts.strip(self._read_while(
            lambda x: not (
                x in VERTICAL_WS or x in _ITEM_STOP
                or self._opts.is_comment(x))))
        if not text:
            raise StructuralError(
                ErrorKind.MALFORMED_VALUE, 'empty list item',
                line=line, col=col)
        return Value(text)
