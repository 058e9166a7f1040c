# -*- encoding: utf-8 -*-
# @File   : serializer.py
# @Time   : 2026/09/23 09:58:16
# @Author : Kariko Lin

"""Document -> canonical CNI text.

Layout is fixed: nameless-section entries first, then one `[name]` block
per section with a blank line in between, `key = value` everywhere and a
trailing line feed. Comments do not survive.

Values keep their spelling. A bare value that can no longer stand bare
(line breaks, comment signs, edge whitespace, a leading quote or bracket)
is written as a raw value instead.
"""

import logging
from io import TextIOBase
from typing import TYPE_CHECKING, Iterable

from .consts import (
    LIST_CLOSE, LIST_OPEN, LIST_SEP, RAW_QUOTE, STR_QUOTE, UNESCAPES,
    VERTICAL_WS, ValueStyle, is_control
)
from .errors import ErrorKind, StructuralError
from .options import CORE, CniOpts, check_key

if TYPE_CHECKING:
    from .model import Document, Value

# `;` counts as a comment sign whatever the extensions say.
_UNSAFE = VERTICAL_WS | frozenset('#;')
_UNSAFE_LEAD = frozenset((RAW_QUOTE, STR_QUOTE, LIST_OPEN))
_UNSAFE_ITEM = frozenset((LIST_SEP, LIST_OPEN, LIST_CLOSE, RAW_QUOTE, STR_QUOTE))


def can_be_bare(text: str) -> bool:
    if not text:
        return True
    if text[0] in _UNSAFE_LEAD or text[0].isspace() or text[-1].isspace():
        return False
    return not any(i in _UNSAFE for i in text)


def quote_raw(text: str) -> str:
    return RAW_QUOTE + text.replace(RAW_QUOTE, RAW_QUOTE * 2) + RAW_QUOTE


def quote_escaped(text: str) -> str:
    buf = [STR_QUOTE]
    for i in text:
        if i in UNESCAPES:
            buf.append('\\' + UNESCAPES[i])
        elif i in VERTICAL_WS or is_control(i):
            buf.append('\\u%04x' % ord(i))
        else:
            buf.append(i)
    buf.append(STR_QUOTE)
    return ''.join(buf)


def render_item(value: 'Value') -> str:
    match value.style:
        case ValueStyle.LIST:
            return value.text
        case ValueStyle.QUOTED:
            return quote_escaped(value.text)
        case ValueStyle.BARE if (
            value.text
            and can_be_bare(value.text)
            and not any(i in _UNSAFE_ITEM for i in value.text)
        ):
            return value.text
        case _:
            return quote_raw(value.text)


def render_list(items: Iterable['Value']) -> str:
    return LIST_OPEN + (LIST_SEP + ' ').join(map(render_item, items)) + LIST_CLOSE


def render_value(value: 'Value') -> str:
    match value.style:
        case ValueStyle.LIST:
            # list text is always a valid literal of its own items.
            return value.text
        case ValueStyle.RAW:
            return quote_raw(value.text)
        case ValueStyle.QUOTED:
            return quote_escaped(value.text)
    if can_be_bare(value.text):
        return value.text
    logging.debug('bare value %r needs quoting, written raw.', value.text)
    return quote_raw(value.text)


def render_entry(key: str, value: 'Value') -> str:
    rendered = render_value(value)
    return f'{key} = {rendered}' if rendered else f'{key} ='


def dumps(doc: 'Document', opts: CniOpts = CORE) -> str:
    """Serialize `doc`. `parse(dumps(doc, opts), opts) == doc` holds for
    every document the parser can produce under `opts`.

    Keys and section names are checked against `opts`; hand-built
    documents with illegal names raise `StructuralError` here.
    """
    lines: list[str] = []
    for section in doc.sections():
        if section.name:
            check_key(section.name, opts)
            if lines:
                lines.append('')
            lines.append(f'[{section.name}]')
        for entry in section.entries():
            if not entry.key:
                raise StructuralError(
                    ErrorKind.EXPECTED_KEY, f'empty key in {section}')
            check_key(entry.key, opts)
            lines.append(render_entry(entry.key, entry.value))
    return '\n'.join(lines) + '\n' if lines else ''


def dump(doc: 'Document', fp: TextIOBase, opts: CniOpts = CORE) -> None:
    fp.write(dumps(doc, opts))
