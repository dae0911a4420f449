# -*- encoding: utf-8 -*-
# @File   : exceptions.py
# @Time   : 2026/10/19 20:31:07
# @Author : Kariko Lin

"""Errors raised by the strict APIs.

The lenient getters on `ConfigSection` never raise these,
they log and return a zero value instead.
"""


class KvConfigError(Exception):
    pass


class InvalidKvRecord(KvConfigError):
    """To record errors when reading interchange files (e.g. YAML)."""
    pass


class ValueParseError(KvConfigError, ValueError):
    """A stored value could not be converted to the requested type."""
    def __init__(self, key: str, value: str, type_name: str) -> None:
        super().__init__(f"Couldn't parse {type_name} from \"{value}\"")
        self.key = key
        self.value = value
        self.type_name = type_name
