# -*- encoding: utf-8 -*-
# @File   : dialect.py
# @Time   : 2026/10/18 14:20:37
# @Author : inidoc contributors

"""Section naming dialects.

A dialect decides how a bracket interior turns into a lookup name,
how a lookup name is written back between the brackets,
how two lookup names compare, and how a qualified key is split.

    ```ini
    [ Section ]         ; PLAIN -> "section"
    [core "Remote"]     ; GIT   -> "core.Remote"
    ```
"""

from dataclasses import dataclass
from re import compile as regex
from typing import Callable

from .consts import QUOTE

__all__ = [
    'Dialect', 'PLAIN', 'GIT', 'FLAT',
    'plain_section_name', 'plain_section_manip',
    'git_section_name', 'git_section_manip',
    'split_first_dot', 'split_last_dot',
    'exact_match', 'match_any', 'trim_value', 'unquote_value',
]

_GIT_HEADER = regex(r'^\s*([^\s"]+)\s+"((?:[^"\\]|\\.)*)"\s*$')
_UNESCAPE = regex(r'\\(["\\])')


def plain_section_name(raw: str) -> str:
    return raw.strip().lower()


def plain_section_manip(logical: str, existing: str | None = None) -> str:
    return logical.strip()


def git_section_name(raw: str) -> str:
    """`[ remote "origin" ]` -> `remote.origin`.

    Like git itself, only the section token is case-insensitive.
    """
    if (m := _GIT_HEADER.match(raw)) is None:
        return plain_section_name(raw)
    sub = _UNESCAPE.sub(r'\1', m[2])
    return f'{m[1].lower()}.{sub}'


def git_section_manip(logical: str, existing: str | None = None) -> str:
    """`remote.origin` -> `remote "origin"`; undotted names stay bare."""
    section, dot, sub = logical.strip().partition('.')
    if not dot:
        return section
    sub = sub.replace('\\', '\\\\').replace(QUOTE, '\\"')
    return f'{section} "{sub}"'


def split_first_dot(qualified: str) -> tuple[str, str]:
    section, dot, key = qualified.partition('.')
    if not dot:
        return '', qualified
    return section, key


def split_last_dot(qualified: str) -> tuple[str, str]:
    section, _, key = qualified.rpartition('.')
    return section, key


def exact_match(a: str, b: str) -> bool:
    return a == b


def match_any(a: str, b: str) -> bool:
    return True


def trim_value(raw: str) -> str:
    return raw.strip()


def unquote_value(raw: str) -> str:
    """Trim, then drop one pair of surrounding double quotes.

    Inside the quotes `\\"` and `\\\\` are unescaped, nothing else.
    """
    raw = raw.strip()
    if len(raw) > 1 and raw[0] == raw[-1] == QUOTE:
        return _UNESCAPE.sub(r'\1', raw[1:-1])
    return raw


@dataclass(frozen=True, kw_only=True)
class Dialect:
    """Strategy bundle used by `IniFile` for every name-sensitive operation.

    Build variants with `dataclasses.replace()`, e.g. a case-sensitive
    plain dialect:

        `replace(PLAIN, name_func=str.strip)`
    """
    name: str = 'custom'
    # raw bracket interior -> lookup name
    name_func: Callable[[str], str] = plain_section_name
    # (lookup name, current raw interior or None) -> raw bracket interior
    manip_func: Callable[[str, str | None], str] = plain_section_manip
    comp_func: Callable[[str, str], bool] = exact_match
    value_func: Callable[[str], str] = trim_value
    split_func: Callable[[str], tuple[str, str]] = split_first_dot

    def normalize(self, logical: str) -> str:
        """Bring a user supplied section name into lookup form,
        by writing it as a header interior and reading it back."""
        if not logical.strip():
            return ''
        return self.name_func(self.manip_func(logical, None))

    def __str__(self) -> str:
        return self.name


PLAIN = Dialect(name='plain')

GIT = Dialect(
    name='git',
    name_func=git_section_name,
    manip_func=git_section_manip,
    split_func=split_last_dot,
)

# every lookup matches every section: the whole file is one namespace.
FLAT = Dialect(name='flat', comp_func=match_any)
