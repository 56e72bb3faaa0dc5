# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/18 14:00:03
# @Author : inidoc contributors

from .ini import (
    FLAT, GIT, PLAIN,
    Dialect,
    IniFile,
    IniFileParser,
    IniLine,
    IniSection,
    LineKind,
    ParseError,
    load,
    load_file,
    load_string,
    new_file,
    parse,
    unquote_value
)
from .export import dump, to_json, to_yaml

__all__ = [
    'FLAT', 'GIT', 'PLAIN', 'Dialect',
    'IniFile', 'IniFileParser', 'IniLine', 'IniSection', 'LineKind',
    'ParseError', 'parse',
    'load', 'load_file', 'load_string', 'new_file', 'unquote_value',
    'dump', 'to_json', 'to_yaml'
]
