# -*- encoding: utf-8 -*-
# @File   : coerce.py
# @Time   : 2026/09/22 15:20:03
# @Author : Kariko Lin

"""Typed readings of a `Value`.

Nothing here touches `Value.text`. A failed reading raises
`TypeMismatchError` (wrong shape or spelling) or `CniOverflowError`
(right spelling, out of range); both are per call, so one bad entry never
spoils the rest of a read.
"""

from math import isinf
from re import compile as regex
from typing import TYPE_CHECKING

from .consts import BOOL_FALSE, BOOL_TRUE, INT_MAX, INT_MIN, ValueKind
from .errors import CniOverflowError, ErrorKind, TypeMismatchError

if TYPE_CHECKING:
    from .model import Value

INTEGER = regex(r'[+-]?[0-9]+')
FLOAT = regex(r'[+-]?(?:[0-9]+(?:\.[0-9]+)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


def _mismatch(
    value: 'Value', wanted: str, line: int | None, col: int | None
) -> TypeMismatchError:
    got = 'list' if value.items is not None else repr(value.text)
    return TypeMismatchError(
        ErrorKind.TYPE_MISMATCH, f'{got} is not a {wanted}',
        line=line, col=col)


def classify(value: 'Value') -> ValueKind:
    if value.items is not None:
        return ValueKind.LIST
    if value.text in (BOOL_TRUE, BOOL_FALSE):
        return ValueKind.BOOLEAN
    if INTEGER.fullmatch(value.text):
        return ValueKind.INTEGER
    if FLOAT.fullmatch(value.text):
        return ValueKind.FLOAT
    return ValueKind.STRING


def as_string(value: 'Value') -> str:
    return value.text


def as_boolean(
    value: 'Value', *, line: int | None = None, col: int | None = None
) -> bool:
    # no "yes", "on", "1" or "True" here.
    if value.items is None:
        if value.text == BOOL_TRUE:
            return True
        if value.text == BOOL_FALSE:
            return False
    raise _mismatch(value, 'boolean', line, col)


def as_integer(
    value: 'Value', *, line: int | None = None, col: int | None = None
) -> int:
    if value.items is not None or not INTEGER.fullmatch(value.text):
        raise _mismatch(value, 'integer', line, col)
    # leading zeros off, then anything over 19 digits is out of range.
    sign = '-' if value.text.startswith('-') else ''
    digits = value.text.lstrip('+-').lstrip('0') or '0'
    ret = int(sign + digits) if len(digits) <= 19 else None
    if ret is None or not INT_MIN <= ret <= INT_MAX:
        raise CniOverflowError(
            ErrorKind.OVERFLOW,
            f'{value.text} does not fit in a signed 64-bit integer',
            line=line, col=col)
    return ret


def as_float(
    value: 'Value', *, line: int | None = None, col: int | None = None
) -> float:
    if value.items is not None or not FLOAT.fullmatch(value.text):
        raise _mismatch(value, 'float', line, col)
    ret = float(value.text)
    if isinf(ret):
        raise CniOverflowError(
            ErrorKind.OVERFLOW,
            f'{value.text} is out of double precision range',
            line=line, col=col)
    return ret


def as_list(
    value: 'Value', *, line: int | None = None, col: int | None = None
) -> list['Value']:
    if value.items is None:
        raise _mismatch(value, 'list', line, col)
    return list(value.items)
