# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/09/21 13:48:20
# @Author : Kariko Lin

"""CNI (CoNfiguration Initialization format) reader and writer.

```python
import pycni

doc = pycni.loads('[server]\\nport = 8080\\n')
doc.get_integer('server', 'port')   # 8080
pycni.dumps(doc)                    # '[server]\\nport = 8080\\n'
```

Extensions are switched per call with `CniOpts`, e.g.
`pycni.loads(text, CniOpts(ini=True))`.
"""

from .consts import ValueKind, ValueStyle
from .errors import (
    CniError, CniOverflowError, ErrorKind, LexicalError,
    MissingKeyError, MissingSectionError, StructuralError, TypeMismatchError
)
from .files import CniFile, CniJsonFile, CniYamlFile
from .model import Document, Entry, Section, Value
from .options import ALL, CORE, CniOpts
from .parser import CniParser, iter_pairs, load, loads
from .scanner import Scanner, Token, TokenType
from .serializer import dump, dumps
from .tree import (
    section_leaves, section_tree, sub_leaves, sub_tree,
    walk_leaves, walk_tree
)

__all__ = [
    'loads', 'load', 'dumps', 'dump', 'iter_pairs',
    'CniOpts', 'CORE', 'ALL',
    'Document', 'Section', 'Entry', 'Value', 'ValueKind', 'ValueStyle',
    'CniParser', 'Scanner', 'Token', 'TokenType',
    'CniFile', 'CniJsonFile', 'CniYamlFile',
    'CniError', 'ErrorKind', 'LexicalError', 'StructuralError',
    'MissingSectionError', 'MissingKeyError', 'TypeMismatchError',
    'CniOverflowError',
    'sub_tree', 'sub_leaves', 'walk_tree', 'walk_leaves',
    'section_tree', 'section_leaves',
]
