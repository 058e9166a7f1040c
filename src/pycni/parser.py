# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/09/25 23:07:41
# @Author : Kariko Lin

"""Tokens -> `Document`.

Single pass, no backtracking: the parser is a small state machine fed one
token at a time, and stops at the first error with that error's position.

    SECTION_OR_KEY --KEY--> EQUALS --EQUALS--> VALUE --VALUE--> LINE_END
    LINE_END --NEWLINE--> CONTINUATION (tabulation, bare value)
                      \\-> SECTION_OR_KEY
"""

import logging
from enum import Enum, auto
from io import TextIOBase
from typing import Iterator

from .consts import ValueStyle
from .errors import ErrorKind, StructuralError, raise_for
from .model import Document, Entry, Section, Value
from .options import CORE, CniOpts, check_key
from .scanner import Scanner, Token, TokenType


class _State(Enum):
    SECTION_OR_KEY = auto()
    EQUALS = auto()
    VALUE = auto()
    LINE_END = auto()
    CONTINUATION = auto()


def _fail(kind: ErrorKind, tok: Token, detail: str = '', **kw) -> None:
    raise StructuralError(kind, detail, line=tok.line, col=tok.col, **kw)


class CniParser:
    """Parse one CNI text with one set of extensions.

    `entries()` is the lazy way in: it yields `(section, entry)` in
    declaration order while filling `self.document`. `parse()` just
    drains it.
    """

    def __init__(self, text: str, opts: CniOpts = CORE) -> None:
        self._text = text
        self._opts = opts
        self.document = Document()
        # header positions, for duplicate reports.
        self.__declared: dict[str, tuple[int, int]] = {}

    @staticmethod
    def readstream(buf: TextIOBase, opts: CniOpts = CORE) -> Document:
        """读取解码好的字符串流。"""
        return CniParser(buf.read(), opts).parse()

    def parse(self) -> Document:
        for _ in self.entries():
            pass
        return self.document

    def entries(self) -> Iterator[tuple[Section, Entry]]:
        opts = self._opts
        section = self.document.header
        state = _State.SECTION_OR_KEY
        key: Token | None = None
        pending: Entry | None = None

        for tok in Scanner(self._text, opts):
            if tok.type is TokenType.ERROR:
                raise_for(tok.kind, tok.text, line=tok.line, col=tok.col)

            if state is _State.CONTINUATION:
                if tok.type is TokenType.CONTINUATION:
                    pending = self._continue(pending, tok)
                    state = _State.LINE_END
                    continue
                section._append(pending)
                yield section, pending
                pending = None
                state = _State.SECTION_OR_KEY

            if tok.type is TokenType.COMMENT:
                continue

            match state, tok.type:
                case _State.SECTION_OR_KEY, TokenType.NEWLINE | TokenType.EOF:
                    pass
                case _State.SECTION_OR_KEY, TokenType.SECTION:
                    section = self._open(tok)
                    state = _State.LINE_END
                case _State.SECTION_OR_KEY, TokenType.KEY:
                    self._check_entry_key(section, tok)
                    key = tok
                    state = _State.EQUALS
                case _State.SECTION_OR_KEY, TokenType.CONTINUATION:
                    _fail(ErrorKind.UNEXPECTED_CONTINUATION, tok, repr(tok.text))
                case _State.SECTION_OR_KEY, _:
                    _fail(ErrorKind.EXPECTED_KEY, tok)

                case _State.EQUALS, TokenType.EQUALS:
                    state = _State.VALUE
                case _State.EQUALS, _:
                    _fail(ErrorKind.EXPECTED_EQUALS, tok, f'after {key.text!r}')

                case _State.VALUE, TokenType.VALUE:
                    pending = Entry(
                        key.text, tok.value, line=key.line, col=key.col)
                    state = _State.LINE_END
                case _State.VALUE, _:
                    _fail(ErrorKind.MALFORMED_VALUE, tok)

                case _State.LINE_END, TokenType.NEWLINE | TokenType.EOF:
                    state = _State.SECTION_OR_KEY
                    if pending is None:
                        continue
                    if (
                        tok.type is TokenType.NEWLINE
                        and opts.tabulation
                        and pending.value.style is ValueStyle.BARE
                    ):
                        state = _State.CONTINUATION
                        continue
                    section._append(pending)
                    yield section, pending
                    pending = None
                case _State.LINE_END, _:
                    _fail(ErrorKind.EXPECTED_LINE_END, tok, repr(tok.text))

    def _check_entry_key(self, section: Section, tok: Token) -> None:
        check_key(tok.text, self._opts, line=tok.line, col=tok.col)
        if tok.text in section:
            _fail(
                ErrorKind.DUPLICATE_KEY, tok, f'{tok.text!r} in {section}',
                original=section.entry(tok.text).pos)

    def _open(self, tok: Token) -> Section:
        name = tok.text
        if tok.padded and not self._opts.flexspace:
            _fail(ErrorKind.UNEXPECTED_WHITESPACE, tok, f'in [{name}] header')
        check_key(name, self._opts, line=tok.line, col=tok.col)
        if name in self.__declared:
            if not self._opts.ini:
                _fail(
                    ErrorKind.DUPLICATE_SECTION, tok, f'[{name}]',
                    original=self.__declared[name])
            logging.debug(
                'line %d: reopening [%s] (ini compatibility).', tok.line, name)
        else:
            self.__declared[name] = (tok.line, tok.col)
        return self.document.add_section(name, line=tok.line, col=tok.col)

    @staticmethod
    def _continue(entry: Entry, tok: Token) -> Entry:
        text = entry.value.text
        text = f'{text}\n{tok.text}' if text else tok.text
        return Entry(entry.key, Value(text), line=entry.line, col=entry.col)


def loads(text: str, opts: CniOpts = CORE) -> Document:
    """Parse CNI text into a `Document`.

    Raises `LexicalError` or `StructuralError` at the first problem.
    """
    return CniParser(text, opts).parse()


def load(fp: TextIOBase, opts: CniOpts = CORE) -> Document:
    return CniParser.readstream(fp, opts)


def iter_pairs(
    text: str, opts: CniOpts = CORE
) -> Iterator[tuple[str, str]]:
    """Flat `(section.key, text)` pairs in declaration order, produced as
    the text is parsed."""
    for section, entry in CniParser(text, opts).entries():
        if section.name:
            yield f'{section.name}.{entry.key}', entry.value.text
        else:
            yield entry.key, entry.value.text
