# -*- encoding: utf-8 -*-
# @File   : options.py
# @Time   : 2026/09/21 14:30:45
# @Author : Kariko Lin

"""Grammar extension switches.

A `CniOpts` is handed to the scanner, parser and serializer on every
call and never touched afterwards, so one process may freely parse with
several configurations at once.
"""

from dataclasses import dataclass, fields

from .consts import (
    CORE_COMMENTS, CORE_KEY_CHARS, CORE_SPACES, INI_COMMENTS, KEY_DELIMITERS,
    VERTICAL_WS, is_control, is_space_separator
)
from .errors import ErrorKind, StructuralError


@dataclass(frozen=True, kw_only=True)
class CniOpts:
    # `;` comments, reopening sections.
    ini: bool = False
    # tab-led lines continue the previous bare value.
    tabulation: bool = False
    # unicode space separators, `[ padded ]` headers.
    flexspace: bool = False
    # wider key character set.
    more_keys: bool = False

    @classmethod
    def from_names(cls, *names: str) -> 'CniOpts':
        """从扩展名构造，例如`CniOpts.from_names('ini', 'more-keys')`。"""
        known = {f.name for f in fields(cls)}
        flags: dict[str, bool] = {}
        for i in names:
            attr = i.strip().replace('-', '_')
            if attr not in known:
                raise ValueError(f'unknown CNI extension: {i!r}')
            flags[attr] = True
        return cls(**flags)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(
            f.name.replace('_', '-')
            for f in fields(self) if getattr(self, f.name))

    def is_comment(self, c: str) -> bool:
        return c in (INI_COMMENTS if self.ini else CORE_COMMENTS)

    def is_space(self, c: str) -> bool:
        """Separator whitespace, never a line break."""
        if c in CORE_SPACES:
            return True
        return self.flexspace and is_space_separator(c)

    def is_key_char(self, c: str) -> bool:
        if not self.more_keys:
            return c in CORE_KEY_CHARS
        return not (
            c in KEY_DELIMITERS
            or self.is_comment(c)
            or c.isspace()
            or is_control(c)
        )

    def strip(self, text: str) -> str:
        start, end = 0, len(text)
        while start < end and self.is_space(text[start]):
            start += 1
        while end > start and self.is_space(text[end - 1]):
            end -= 1
        return text[start:end]

    def __str__(self) -> str:
        return ','.join(self.names) or 'core'


CORE = CniOpts()
ALL = CniOpts(ini=True, tabulation=True, flexspace=True, more_keys=True)


def scans_as_key(c: str, opts: CniOpts) -> bool:
    """Whether the scanner keeps `c` inside a key run.

    A superset of every key set. Legality under `opts` is the parser's
    call (`check_key()`).
    """
    return not (
        c in KEY_DELIMITERS
        or c in VERTICAL_WS
        or opts.is_comment(c)
        or c.isspace()
        or is_control(c)
    )


def check_key(
    key: str, opts: CniOpts, *,
    line: int | None = None, col: int | None = None
) -> None:
    """Raise `StructuralError` unless `key` is a legal key (or section
    name) under `opts`. Empty keys are the caller's business."""
    if key.startswith('.') or key.endswith('.'):
        raise StructuralError(
            ErrorKind.INVALID_KEY, f'{key!r} starts or ends with a dot',
            line=line, col=col)
    for i in key:
        if opts.is_key_char(i):
            continue
        hint = (
            ' without the more-keys extension'
            if not opts.more_keys and ALL.is_key_char(i) else '')
        raise StructuralError(
            ErrorKind.INVALID_KEY, f'{i!r} is not allowed in {key!r}{hint}',
            line=line, col=col)
