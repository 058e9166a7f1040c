# -*- encoding: utf-8 -*-
# @File   : files.py
# @Time   : 2026/09/28 11:40:52
# @Author : Kariko Lin

"""Reading and writing documents on disk.

`CniFile` is the text format itself. `CniJsonFile` and `CniYamlFile` hold
the flat `section.key -> value` store (what the CNI dump tools print),
and read back into a `Document` through `Document.from_flat()`.
"""

import json
import logging
from io import StringIO

import chardet
import yaml

from .abstract import DocumentHandler
from .model import Document
from .options import CORE, CniOpts
from .parser import CniParser
from .serializer import dumps


class CniFile(DocumentHandler):
    def __init__(
        self, filename, encoding: str | None = None, *,
        opts: CniOpts = CORE
    ) -> None:
        super().__init__(filename, encoding)
        self._opts = opts

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8', 'confidence': 0.0}

        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            logging.warning(
                f'`{filename}` is not {codec["encoding"]} either, '
                'undecodable bytes replaced.')
            buf = raw.decode('utf-8', errors='replace')
        return StringIO(buf)

    def read(self) -> Document:
        """读取实例指定的 CNI 文件。

        未指定`encoding`时按 UTF-8 打开（与`write()`一致），
        解码失败再交给`chardet`猜。
        """
        try:
            # newline='' keeps CR/CRLF for the scanner to count.
            with open(self._fn, 'r', encoding=self._codec or 'utf-8',
                      newline='') as fp:
                return CniParser.readstream(fp, self._opts)
        except UnicodeDecodeError:
            logging.info(f'`{self._fn}` failed to decode, guessing codec.')
            return CniParser.readstream(
                self._decode_file(self._fn), self._opts)

    def write(self, instance: Document) -> None:
        text = dumps(instance, self._opts)
        with open(self._fn, 'w', encoding=self._codec or 'utf-8',
                  newline='') as fp:
            fp.write(text)

    def __str__(self) -> str:
        return f'CNI file: {self._fn} ({self._opts})'


class CniJsonFile(DocumentHandler):
    def __init__(self, filename, encoding: str = 'utf-8') -> None:
        super().__init__(filename, encoding)

    def read(self) -> Document:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return Document.from_flat(json.load(fp))

    def write(self, instance: Document, indent: int = 2) -> None:
        data = instance.flatten()
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(data, fp, ensure_ascii=False, indent=indent)


class CniYamlFile(DocumentHandler):
    def __init__(self, filename, encoding: str = 'utf-8') -> None:
        super().__init__(filename, encoding)

    def read(self) -> Document:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            data = yaml.safe_load(fp)
        # an empty file loads as None.
        return Document.from_flat(data or {})

    def write(self, instance: Document) -> None:
        data = instance.flatten()
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(
                data, fp,
                allow_unicode=True, sort_keys=False,
                default_flow_style=False)
