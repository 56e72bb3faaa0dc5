# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/18 14:01:26
# @Author : inidoc contributors

from .consts import LineKind
from .dialect import FLAT, GIT, PLAIN, Dialect, unquote_value
from .model import IniFile, IniLine, IniSection
from .parser import (
    IniFileParser,
    ParseError,
    load,
    load_file,
    load_string,
    new_file,
    parse
)
