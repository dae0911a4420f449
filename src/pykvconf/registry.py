# -*- encoding: utf-8 -*-
# @File   : registry.py
# @Time   : 2026/10/19 21:40:18
# @Author : Kariko Lin

"""One `ConfigSection` per file path.

Loading the same path twice from one registry gives the very same section,
so edits made through one reference are seen through the other.
"""

import logging
from collections.abc import Iterator
from os import PathLike
from threading import Lock

from .kv.consts import DEFAULT_ENCODING
from .kv.model import ConfigSection, normalize_path

__all__ = ['SectionRegistry', 'default_registry', 'load']

logger = logging.getLogger(__name__)


class SectionRegistry:
    def __init__(self) -> None:
        self.__sections: dict[str, ConfigSection] = {}
        # lookup and insert as a whole, or two threads may build two sections.
        self.__lock = Lock()

    def load(
        self, path: str | PathLike[str], create: bool = True, *,
        encoding: str | None = DEFAULT_ENCODING
    ) -> ConfigSection:
        """Get the section of `path`, either cached or newly loaded.

        `create` and `encoding` only matter on the first load of a path.
        """
        key = normalize_path(path)
        with self.__lock:
            if (section := self.__sections.get(key)) is None:
                section = ConfigSection(key, create, encoding=encoding)
                self.__sections[key] = section
                logger.debug(f'Loaded {len(section)} pair(s) from: {key}')
            return section

    def get(self, path: str | PathLike[str]) -> ConfigSection | None:
        """The cached section of `path`, or `None`. Never loads anything."""
        return self.__sections.get(normalize_path(path))

    def clear(self) -> None:
        """Forget all cached sections. Files on disk are left untouched."""
        with self.__lock:
            self.__sections.clear()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, PathLike)):
            return False
        return normalize_path(path) in self.__sections

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.__sections))

    def __len__(self) -> int:
        return len(self.__sections)

    def __repr__(self) -> str:
        return '<SectionRegistry { .cnt = %d }>' % len(self)


# used by `load()`; lives as long as the process.
default_registry = SectionRegistry()


def load(
    path: str | PathLike[str], create: bool = True, *,
    encoding: str | None = DEFAULT_ENCODING
) -> ConfigSection:
    """Load a section from `path` through `default_registry`.

    If the file doesn't exist it will be created, unless `create` is False.
    """
    return default_registry.load(path, create, encoding=encoding)
