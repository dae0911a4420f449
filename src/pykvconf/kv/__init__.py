# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 21:12:03
# @Author : Kariko Lin

from .model import ConfigSection
from .parser import KvParser, KvYamlParser
