# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 20:40:12
# @Author : Kariko Lin

"""Readers and writers of flat key-value files.

The native format is one pair per line:

    ```
    age: 10
    name: Bob
    ```

Nothing else is supported. No sections, no comments, no escaping.
Lines without a `:` are skipped, and a duplicated key keeps its last value.
"""

from codecs import lookup
from collections.abc import Mapping
from io import StringIO, TextIOBase
from os import PathLike

import chardet
import yaml

from ..abstract import FileHandler
from ..exceptions import InvalidKvRecord
from .consts import (
    CHARDET_CONFIDENCE,
    DEFAULT_ENCODING,
    DELIMITER,
    FALLBACK_ENCODING,
    SEPARATOR,
)


class KvParser(FileHandler[dict[str, str]]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = DEFAULT_ENCODING
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @property
    def _read_codec(self) -> str | None:
        # a leading BOM (e.g. from Notepad) must not stick to the first key.
        if self._codec is not None and lookup(self._codec).name == 'utf-8':
            return 'utf-8-sig'
        return self._codec

    @property
    def encoding(self) -> str | None:
        return self._codec

    @staticmethod
    def parseline(line: str) -> tuple[str, str] | None:
        """Split one line into a trimmed `(key, value)` pair.

        Returns `None` for lines that carry no pair,
        i.e. without a delimiter or with an empty key.
        """
        if DELIMITER not in line:
            return None
        key, val = line.split(DELIMITER, 1)
        key = key.strip()
        if not key:
            return None
        return key, val.strip()

    @staticmethod
    def readstream(
        buf: TextIOBase, ins: dict[str, str] | None = None
    ) -> dict[str, str]:
        """Read pairs from a decoded text stream into `ins`.

        Pairs parsed so far stay in `ins` if the stream raises midway.
        """
        if ins is None:
            ins = {}
        while i := buf.readline():
            if (pair := KvParser.parseline(i)) is None:
                continue
            key, val = pair
            ins[key] = val
        return ins

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if (codec is None or codec['encoding'] is None
                or codec['confidence'] < CHARDET_CONFIDENCE):
            codec = {'encoding': DEFAULT_ENCODING}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode(FALLBACK_ENCODING)
        return StringIO(buf)

    def read(self, ins: dict[str, str] | None = None) -> dict[str, str]:
        """Read the file this parser is bound to.

        May raise `OSError`.
        """
        if ins is None:
            ins = {}
        try:
            # encoding None means the platform default.
            with open(self._fn, 'r', encoding=self._read_codec) as fp:
                return self.readstream(fp, ins)
        except UnicodeDecodeError:
            ins.clear()
            return self.readstream(self._decode_file(self._fn), ins)

    def write(self, instance: Mapping[str, str]) -> None:
        """Overwrite the file with one `key: value` line per pair.

        May raise `OSError`.
        """
        # same codec as `read()`, None is the platform default both ways.
        with open(self._fn, 'w', encoding=self._codec) as fp:
            for k, v in instance.items():
                fp.write(f'{k}{SEPARATOR}{v}\n')

    def __str__(self) -> str:
        return "Key-value file: " + super().__str__() + f"({self._codec})"


class KvYamlParser(FileHandler[dict[str, str]]):
    """Flat YAML mapping, for interchange with other tools.

    Scalars are stringified on read, so `port: 8080` and `port: '8080'`
    come back the same. Nested mappings and sequences are rejected.
    """

    def read(self) -> dict[str, str]:
        with open(self._fn, 'r', encoding='utf-8') as fp:
            data = yaml.safe_load(fp)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise InvalidKvRecord(
                f'{self._fn}: top level must be a mapping, '
                f'got {type(data).__name__}.')

        ret: dict[str, str] = {}
        for k, v in data.items():
            if isinstance(v, (dict, list)):
                raise InvalidKvRecord(
                    f'{self._fn}: "{k}" is nested, which is not supported.')
            ret[str(k)] = '' if v is None else str(v)
        return ret

    def write(self, instance: Mapping[str, str]) -> None:
        with open(self._fn, 'w', encoding='utf-8') as fp:
            yaml.safe_dump(
                {str(k): str(v) for k, v in instance.items()}, fp,
                allow_unicode=True,
                default_flow_style=False,
                sort_keys=False)

    def __str__(self) -> str:
        return "YAML file: " + super().__str__()
