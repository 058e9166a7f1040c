# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/09/21 14:02:11
# @Author : Kariko Lin

from enum import Enum
from unicodedata import category


# Perl / Raku "\v". `\r\n` is folded into one break by the scanner.
VERTICAL_WS = frozenset('\n\x0b\x0c\r\x85\u2028\u2029')

CORE_SPACES = frozenset(' \t')
CORE_COMMENTS = frozenset('#')
INI_COMMENTS = frozenset('#;')

CORE_KEY_CHARS = frozenset(
    '0123456789'
    'abcdefghijklmnopqrstuvwxyz'
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
    '-_.'
)
# never part of a key, whatever the extensions say.
KEY_DELIMITERS = frozenset('[]=`"')

RAW_QUOTE = '`'
STR_QUOTE = '"'
LIST_OPEN, LIST_CLOSE, LIST_SEP = '[', ']', ','

# quoted literal escapes, `\uXXXX` is handled separately.
ESCAPES = {
    '\\': '\\',
    '"': '"',
    'n': '\n',
    't': '\t',
    'r': '\r',
    '0': '\0',
    'b': '\b',
    'f': '\f',
}
UNESCAPES = {v: k for k, v in ESCAPES.items()}

BOOL_TRUE = 'true'
BOOL_FALSE = 'false'

# signed 64-bit, the widest integer the format promises.
INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1


def is_space_separator(c: str) -> bool:
    return c == '\t' or category(c) == 'Zs'


def is_control(c: str) -> bool:
    return category(c) == 'Cc'


class ValueStyle(str, Enum):
    """How a value was written. Formatting only, never compared."""
    BARE = 'bare'
    RAW = 'raw'
    QUOTED = 'quoted'
    LIST = 'list'


class ValueKind(str, Enum):
    STRING = 'string'
    INTEGER = 'integer'
    FLOAT = 'float'
    BOOLEAN = 'boolean'
    LIST = 'list'
