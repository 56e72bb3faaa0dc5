# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2026/10/18 18:12:54
# @Author : inidoc contributors

"""Dump the values of an INI document to JSON or YAML.

Only the key/value mapping is exported, comments and layout are not.
"""

import json
from os.path import splitext

import yaml

from .ini import IniFile

__all__ = ['to_json', 'to_yaml', 'dump']


def _mapping(doc: IniFile, flat: bool) -> dict:
    return doc.get_map_flat() if flat else doc.get_map()


def to_json(doc: IniFile, *, flat: bool = False, indent: int = 2) -> str:
    return json.dumps(_mapping(doc, flat), ensure_ascii=False, indent=indent)


def to_yaml(doc: IniFile, *, flat: bool = False) -> str:
    # keep document order, not alphabetical.
    return yaml.safe_dump(
        _mapping(doc, flat), allow_unicode=True, sort_keys=False)


def dump(
    doc: IniFile, filename: str, *,
    flat: bool = False, encoding: str = 'utf-8'
) -> None:
    """Write to `filename`, the format follows its extension."""
    match splitext(filename)[1].lower():
        case '.json':
            text = to_json(doc, flat=flat)
        case '.yaml' | '.yml':
            text = to_yaml(doc, flat=flat)
        case ext:
            raise ValueError(f'unsupported export format: "{ext}"')
    with open(filename, 'w', encoding=encoding) as fp:
        fp.write(text)
