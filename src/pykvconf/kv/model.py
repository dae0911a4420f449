# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 21:02:55
# @Author : Kariko Lin

"""A flat key-value section bound to one file on disk."""

import logging
from collections.abc import Callable, Iterator, MutableMapping
from math import copysign, inf
from os import PathLike, fspath
from os.path import abspath, exists, normpath
from re import compile as regex
from struct import pack, unpack
from threading import RLock
from typing import TypeVar
from warnings import warn

from ..abstract import FileHandler
from ..exceptions import ValueParseError
from .consts import DEFAULT_ENCODING, DELIMITER, INT_BITS, LONG_BITS
from .parser import KvParser

logger = logging.getLogger(__name__)

V = TypeVar('V')

# no whitespace, no `_` grouping. just like Java `parseInt`.
_INTEGER = regex(r'[+-]?[0-9]+')
# Java `parseDouble` literals, hex floats aside. no `inf`, no `nan`.
_DOUBLE = regex(
    r'[+-]?(?:NaN|Infinity|'
    r'(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)')


def normalize_path(path: str | PathLike[str]) -> str:
    """So that `./a.conf`, `x/../a.conf` and the absolute one are the same."""
    return normpath(abspath(fspath(path)))


def _bounded_int(bits: int, type_name: str) -> Callable[[str], int]:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def convert(text: str) -> int:
        if not _INTEGER.fullmatch(text):
            raise ValueError(f'invalid {type_name} literal: {text!r}')
        ret = int(text)
        if not low <= ret <= high:
            raise OverflowError(f'{text} is out of {type_name} range.')
        return ret

    convert.__name__ = type_name
    return convert


def to_double(text: str) -> float:
    """Surrounding whitespace is trimmed first, as `parseDouble` does."""
    text = text.strip()
    if not _DOUBLE.fullmatch(text):
        raise ValueError(f'invalid double literal: {text!r}')
    return float(text.rstrip('fFdD'))


def to_float(text: str) -> float:
    """Parse, then round to single precision."""
    ret = to_double(text)
    try:
        return unpack('f', pack('f', ret))[0]
    except OverflowError:
        return copysign(inf, ret)


to_double.__name__ = 'double'
to_float.__name__ = 'float'
to_int = _bounded_int(INT_BITS, 'int')
to_long = _bounded_int(LONG_BITS, 'long')


class ConfigSection(MutableMapping[str, str]):
    """Pairs loaded from a `key: value` file.

    Edits stay in memory until `save()` is called. Typed getters never raise,
    a missing key gives the zero value of the type, and a value that fails to
    parse gives the same zero value plus a logged warning.
    Use `parse()` to get the failure as an exception instead.

    Example:

        ```python
        section = pykvconf.load('test.txt')
        age = section.get_int('age')
        name = section.get_string('name')

        section.set('age', 10)
        section.set('name', 'Bob')
        section.save()
        ```
    """

    def __init__(
        self, path: str | PathLike[str], create: bool = True, *,
        encoding: str | None = DEFAULT_ENCODING
    ) -> None:
        self._path = normalize_path(path)
        self._parser = KvParser(self._path, encoding)
        self._data: dict[str, str] = {}
        self._lock = RLock()
        self.reload(create)

    @property
    def path(self) -> str:
        return self._path

    @property
    def encoding(self) -> str | None:
        return self._parser.encoding

    def reload(self, create: bool = True) -> bool:
        """Empty the section and load the pairs from the file again.

        Args:
            create: create an empty file if it doesn't exist.

        Returns:
            `False` if an I/O error was logged, otherwise `True`
            (including a missing file with `create=False`).
        """
        with self._lock:
            self._data.clear()
            if not exists(self._path):
                if not create:
                    return True
                try:
                    with open(self._path, 'x', encoding=self.encoding):
                        pass
                except FileExistsError:
                    pass  # someone else was faster, just read it.
                except OSError as e:
                    logger.warning(
                        f'Error creating a file in: {self._path}\n  {e}')
                    return False

            try:
                self._parser.read(self._data)
            except OSError as e:
                logger.warning(
                    f'Error loading a file from: {self._path}\n  {e}')
                return False
            return True

    def save(self) -> bool:
        """Write all pairs to the file, creating it if necessary.

        Returns:
            `False` if an I/O error was logged, otherwise `True`.
        """
        with self._lock:
            try:
                self._parser.write(self._data)
            except OSError:
                logger.exception(f'Error saving a file to: {self._path}')
                return False
            return True

    def destroy(self) -> None:
        """Empty the section in memory. The file is left untouched."""
        with self._lock:
            self._data.clear()

    # getters

    def parse(self, key: str, converter: Callable[[str], V]) -> V:
        """Convert the value of `key` with `converter`.

        Raises:
            KeyError: `key` not found.
            ValueParseError: `converter` failed on the stored value.
        """
        with self._lock:
            value = self._data[key]
        try:
            return converter(value)
        except (ValueError, OverflowError) as e:
            raise ValueParseError(
                key, value,
                getattr(converter, '__name__', repr(converter))) from e

    def __lenient(
        self, key: str, converter: Callable[[str], V], zero: V
    ) -> V:
        try:
            return self.parse(key, converter)
        except KeyError:
            return zero
        except ValueParseError as e:
            logger.warning(str(e))
            return zero

    def get_boolean(self, key: str) -> bool:
        """`True` only if the value is "true", case ignored."""
        value = self._data.get(key)
        return value is not None and value.lower() == 'true'

    def get_int(self, key: str) -> int:
        return self.__lenient(key, to_int, 0)

    def get_long(self, key: str) -> int:
        return self.__lenient(key, to_long, 0)

    def get_float(self, key: str) -> float:
        return self.__lenient(key, to_float, 0.0)

    def get_double(self, key: str) -> float:
        return self.__lenient(key, to_double, 0.0)

    def get_string(self, key: str) -> str | None:
        return self._data.get(key)

    # setters

    def set(self, key: str, value: object) -> None:
        """Store `str(value)` under `key`. Call `save()` to persist it."""
        self[key] = value

    def __setitem__(self, key: str, value: object) -> None:
        text = str(value)
        if (not key or DELIMITER in key or key != key.strip()
                or text != text.strip()
                or '\n' in key or '\n' in text or '\r' in text):
            warn(
                f'"{key}" -> "{text}" would not survive save() and reload(), '
                'keys must be non-empty without ":", both sides trimmed, '
                'and no line breaks at all.')
        with self._lock:
            self._data[key] = text

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __delitem__(self, key: str) -> None:
        with self._lock:
            del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return '<ConfigSection %s { .cnt = %d }>' % (self._path, len(self))

    def to_dict(self) -> dict[str, str]:
        return self._data.copy()

    # interchange

    def export_to(self, handler: FileHandler[dict[str, str]]) -> None:
        """Write the pairs through another handler, e.g. `KvYamlParser`.

        The section's own file is not touched. May raise `OSError`.
        """
        handler.write(self.to_dict())

    def import_from(self, handler: FileHandler[dict[str, str]]) -> None:
        """Merge the pairs read by `handler` into this section.

        Same keys get overwritten. Nothing is saved.
        """
        pairs = handler.read()
        with self._lock:
            for k, v in pairs.items():
                self[k] = v
