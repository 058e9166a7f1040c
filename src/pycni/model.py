# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/09/22 10:41:27
# @Author : Kariko Lin

"""CNI document model.

```cni
key = value     # lives in `Document.header`, the nameless section.

[section]
flag = true
nums = [1, 2, 3]
raw = `kept as is, `` included`
```

A `Value` never forgets how it was spelt: `007` stays `007` and `True`
stays `True` until someone replaces the whole entry. Typed readings are
computed on demand, see `coerce`.
"""

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from math import isfinite
from typing import Any
from warnings import warn

from . import coerce
from .consts import BOOL_FALSE, BOOL_TRUE, ValueKind, ValueStyle
from .errors import (
    ErrorKind, MissingKeyError, MissingSectionError, StructuralError
)
from .serializer import render_list


@dataclass(frozen=True)
class Value:
    text: str
    items: tuple['Value', ...] | None = None
    style: ValueStyle = field(default=ValueStyle.BARE, compare=False)

    def __post_init__(self) -> None:
        if self.items is not None and self.style is not ValueStyle.LIST:
            object.__setattr__(self, 'style', ValueStyle.LIST)
        elif self.items is None and self.style is ValueStyle.LIST:
            raise ValueError('a list value needs its items')

    @classmethod
    def of(cls, obj: Any) -> 'Value':
        """Wrap a plain Python object, spelling it the way the parser would
        read it back."""
        match obj:
            case Value():
                return obj
            case None:
                return cls('')
            case bool():
                return cls(BOOL_TRUE if obj else BOOL_FALSE)
            case int():
                return cls(str(obj))
            case float():
                if not isfinite(obj):
                    raise ValueError(f'{obj!r} has no CNI spelling')
                return cls(repr(obj))
            case str():
                return cls(obj)
            case list() | tuple():
                return cls.of_list(obj)
            case _:
                return cls(str(obj))

    @classmethod
    def of_list(cls, items: Iterable[Any]) -> 'Value':
        values = tuple(cls.of(i) for i in items)
        return cls(render_list(values), values)

    @property
    def is_list(self) -> bool:
        return self.items is not None

    @property
    def kind(self) -> ValueKind:
        return coerce.classify(self)

    def as_string(self) -> str:
        return coerce.as_string(self)

    def as_boolean(self) -> bool:
        return coerce.as_boolean(self)

    def as_integer(self) -> int:
        return coerce.as_integer(self)

    def as_float(self) -> float:
        return coerce.as_float(self)

    def as_list(self) -> list['Value']:
        return coerce.as_list(self)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Entry:
    key: str
    value: Value
    # where the key starts in the source, if parsed.
    line: int | None = field(default=None, compare=False)
    col: int | None = field(default=None, compare=False)

    @property
    def pos(self) -> tuple[int, int] | None:
        if self.line is None or self.col is None:
            return None
        return self.line, self.col


class Section(MutableMapping[str, Value]):
    """有序的 CNI 小节：键到`Value`的映射，同时保留每个词条的源位置。

    赋值即整条替换（`Entry`不可变），不会就地修改原有的词法形式。
    覆盖已存在的键会给出警告，确实要覆盖请用`replace()`。
    """

    def __init__(
        self, name: str = '', entries: Iterable[Entry] = (), *,
        line: int | None = None, col: int | None = None
    ) -> None:
        self._name = name
        self.line = line
        self.col = col
        self.__entries: dict[str, Entry] = {}
        for i in entries:
            self._append(i)

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> Value:
        return self.__entries[key].value

    def __setitem__(self, key: str, value: Any) -> None:
        if key in self.__entries:
            warn(
                f'{self} already has "{key}" '
                f'(= {self.__entries[key].value.text!r}), replacing it.')
        self.replace(key, value)

    def __delitem__(self, key: str) -> None:
        del self.__entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.__entries)

    def __len__(self) -> int:
        return len(self.__entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return (
            self._name == other._name
            and list(self.entries()) == list(other.entries())
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self))

    def _append(self, entry: Entry) -> None:
        """for the parser, which has already checked for duplicates."""
        self.__entries[entry.key] = entry

    def replace(self, key: str, value: Any) -> None:
        """Swap in a whole new entry, keeping its place in the order."""
        old = self.__entries.get(key)
        self.__entries[key] = Entry(
            key, Value.of(value),
            line=old.line if old else None,
            col=old.col if old else None)

    def entry(self, key: str) -> Entry:
        try:
            return self.__entries[key]
        except KeyError:
            raise MissingKeyError(self._name, key) from None

    def entries(self) -> Iterator[Entry]:
        return iter(self.__entries.values())

    def lookup(self, key: str) -> Value:
        return self.entry(key).value

    def get_string(self, key: str) -> str:
        return coerce.as_string(self.lookup(key))

    def get_boolean(self, key: str) -> bool:
        e = self.entry(key)
        return coerce.as_boolean(e.value, line=e.line, col=e.col)

    def get_integer(self, key: str) -> int:
        e = self.entry(key)
        return coerce.as_integer(e.value, line=e.line, col=e.col)

    def get_float(self, key: str) -> float:
        e = self.entry(key)
        return coerce.as_float(e.value, line=e.line, col=e.col)

    def get_list(self, key: str) -> list[Value]:
        e = self.entry(key)
        return coerce.as_list(e.value, line=e.line, col=e.col)


class Document(MutableMapping[str, Section]):
    """一份 CNI 文档：按声明顺序排列的小节。

    空名小节`''`始终存在（即`self.header`），存放首个小节头之前的词条，
    以及`[]`之后的词条。遍历时总是排在最前。
    """

    def __init__(self) -> None:
        self.__sections: dict[str, Section] = {'': Section()}

    @property
    def header(self) -> Section:
        return self.__sections['']

    def __getitem__(self, name: str) -> Section:
        return self.__sections[name]

    def __setitem__(
        self, name: str, value: Section | Mapping[str, Any]
    ) -> None:
        section = Section(name)
        if isinstance(value, Section):
            section.line, section.col = value.line, value.col
            for i in value.entries():
                section._append(i)
        else:
            for k, v in value.items():
                section.replace(k, v)
        self.__sections[name] = section

    def __delitem__(self, name: str) -> None:
        if name == '':
            # the nameless section only ever gets emptied.
            self.__sections[''] = Section()
            return
        del self.__sections[name]

    def __contains__(self, name: object) -> bool:
        return name in self.__sections

    def __iter__(self) -> Iterator[str]:
        return iter(self.__sections)

    def __len__(self) -> int:
        return len(self.__sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return list(self.sections()) == list(other.sections())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return '<CNI Document: %d sections, %d entries>' % (
            len(self) - 1, sum(len(i) for i in self.sections()))

    def add_section(
        self, name: str, *,
        line: int | None = None, col: int | None = None
    ) -> Section:
        """Open `name`, or hand back the existing section of that name."""
        if name not in self.__sections:
            self.__sections[name] = Section(name, line=line, col=col)
        return self.__sections[name]

    def sections(self) -> Iterator[Section]:
        return iter(self.__sections.values())

    def walk(self) -> Iterator[tuple[Section, Entry]]:
        """Every entry in document order, nameless section first."""
        for section in self.__sections.values():
            for entry in section.entries():
                yield section, entry

    def section(self, name: str) -> Section:
        try:
            return self.__sections[name]
        except KeyError:
            raise MissingSectionError(name) from None

    def lookup(self, section: str, key: str) -> Value:
        return self.section(section).lookup(key)

    def get_string(self, section: str, key: str) -> str:
        return self.section(section).get_string(key)

    def get_boolean(self, section: str, key: str) -> bool:
        return self.section(section).get_boolean(key)

    def get_integer(self, section: str, key: str) -> int:
        return self.section(section).get_integer(key)

    def get_float(self, section: str, key: str) -> float:
        return self.section(section).get_float(key)

    def get_list(self, section: str, key: str) -> list[Value]:
        return self.section(section).get_list(key)

    def pairs(self) -> Iterator[tuple[str, Value]]:
        """Flat `section.key` view, the way CNI itself names things."""
        for section, entry in self.walk():
            if section.name:
                yield f'{section.name}.{entry.key}', entry.value
            else:
                yield entry.key, entry.value

    def flatten(self) -> dict[str, str]:
        """`pairs()` as a dict. Raises `StructuralError` when two entries
        flatten to one key, e.g. `a.b` up top and `b` under `[a]`."""
        ret: dict[str, str] = {}
        seen: dict[str, tuple[Section, Entry]] = {}
        for section, entry in self.walk():
            key = f'{section.name}.{entry.key}' if section.name else entry.key
            if key in seen:
                first, old = seen[key]
                raise StructuralError(
                    ErrorKind.DUPLICATE_KEY,
                    f'{key!r} is both in {first} and {section}',
                    line=entry.line, col=entry.col, original=old.pos)
            seen[key] = section, entry
            ret[key] = entry.value.text
        return ret

    @classmethod
    def from_flat(cls, data: Mapping[str, Any]) -> 'Document':
        """Build a document out of a flat (or nested) key/value store.

        The first dotted component of a key becomes its section, so
        `{'a.b.c': 'd'}` ends up as `b.c = d` under `[a]`. Nested
        mappings are joined with dots first.
        """
        ret = cls()
        for key, val in _join_nested(data):
            name, dot, rest = key.partition('.')
            if dot:
                ret.add_section(name).replace(rest, val)
            else:
                ret.header.replace(key, val)
        return ret


def _join_nested(
    data: Mapping[str, Any], prefix: str = ''
) -> Iterator[tuple[str, Any]]:
    for k, v in data.items():
        key = f'{prefix}.{k}' if prefix else str(k)
        if isinstance(v, Mapping):
            yield from _join_nested(v, key)
        else:
            yield key, v
