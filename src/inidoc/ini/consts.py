# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/18 14:02:11
# @Author : inidoc contributors

from enum import Enum


class LineKind(str, Enum):
    BLANK = 'blank'
    COMMENT = 'comment'
    SECTION = 'section'
    KEY = 'key'


COMMENT_MARKS = ';#'
# '\n' is the only line separator, so '\r' of CRLF counts as whitespace.
WHITESPACE = ' \t\r\f\v'
ESCAPE = '\\'
QUOTE = '"'

# indent for the first key of a named section without any keys yet.
DEFAULT_INDENT = '\t'

TRUE_WORDS = frozenset(('1', 't', 'true', 'y', 'yes', 'on'))
FALSE_WORDS = frozenset(('0', 'f', 'false', 'n', 'no', 'off'))

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1
