# -*- encoding: utf-8 -*-
# @File   : tree.py
# @Time   : 2026/09/27 16:33:09
# @Author : Kariko Lin

"""The CNI "recommended API" over flat `section.key` stores.

Works on anything `Document.flatten()` or `Document.pairs()` gives back,
or on any other mapping of dotted keys. An empty section name means the
top level.

```python
flat = loads('[a]\\nx = 1\\nb.y = 2\\n[c]\\nz = 3').flatten()
sub_tree(flat, 'a')        # {'x': '1', 'b.y': '2'}
sub_leaves(flat, 'a')      # {'x': '1'}
section_tree(flat, '')     # ['a', 'a.b', 'c']
```
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import TypeVar

V = TypeVar('V')

Pairs = Mapping[str, V] | Iterable[tuple[str, V]]


def _pairs(data: Pairs) -> Iterable[tuple[str, V]]:
    return data.items() if isinstance(data, Mapping) else data


def _relative(key: str, section: str) -> str | None:
    """`key` with the `section.` prefix cut off, `None` if outside."""
    if not section:
        return key
    if key.startswith(section) and key[len(section):].startswith('.'):
        return key[len(section) + 1:]
    return None


def walk_tree(data: Pairs, section: str) -> Iterator[tuple[str, V]]:
    """`WalkTree`: pairs under `section`, full keys kept."""
    for k, v in _pairs(data):
        if _relative(k, section) is not None:
            yield k, v


def walk_leaves(data: Pairs, section: str) -> Iterator[tuple[str, V]]:
    """`WalkLeaves`: like `walk_tree()`, direct children only."""
    for k, v in _pairs(data):
        rel = _relative(k, section)
        if rel is not None and '.' not in rel:
            yield k, v


def sub_tree(data: Pairs, section: str) -> dict[str, V]:
    """`SubTree`: everything under `section`, keys made relative.

    `.keys()` / `.values()` of the result are `KeyTree` / `ListTree`.
    """
    return {_relative(k, section): v for k, v in walk_tree(data, section)}


def sub_leaves(data: Pairs, section: str) -> dict[str, V]:
    """`SubLeaves`: direct children of `section`, keys made relative."""
    return {_relative(k, section): v for k, v in walk_leaves(data, section)}


def section_tree(data: Pairs, section: str) -> list[str]:
    """`SectionTree`: every (sub)section below `section`, sorted.

    Sections are implied by dotted keys, a header is not needed.
    """
    ret: set[str] = set()
    for k, _ in walk_tree(data, section):
        parts = _relative(k, section).split('.')[:-1]
        for i in range(1, len(parts) + 1):
            ret.add('.'.join(parts[:i]))
    return sorted(ret)


def section_leaves(data: Pairs, section: str) -> list[str]:
    """`SectionLeaves`: direct subsections of `section`, sorted."""
    return [i for i in section_tree(data, section) if '.' not in i]
