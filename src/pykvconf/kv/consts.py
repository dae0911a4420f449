# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/19 20:25:41
# @Author : Kariko Lin

# `key: value`, split on the FIRST delimiter only.
DELIMITER = ':'
SEPARATOR = ': '

DEFAULT_ENCODING = 'utf-8'
# below this, `chardet` guesses are not trusted.
CHARDET_CONFIDENCE = 0.8
# never fails, so it is the last resort.
FALLBACK_ENCODING = 'latin-1'

INT_BITS = 32
LONG_BITS = 64
