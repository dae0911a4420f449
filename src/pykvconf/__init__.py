# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 21:50:36
# @Author : Kariko Lin

import logging

from .exceptions import InvalidKvRecord, KvConfigError, ValueParseError
from .kv import ConfigSection, KvParser, KvYamlParser
from .registry import SectionRegistry, default_registry, load

__all__ = [
    'ConfigSection', 'KvParser', 'KvYamlParser',
    'SectionRegistry', 'default_registry', 'load',
    'KvConfigError', 'InvalidKvRecord', 'ValueParseError'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
