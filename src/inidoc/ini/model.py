# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/18 15:40:02
# @Author : inidoc contributors

"""
Lossless INI document model.

`IniFile` owns every physical line of the source, in order,
and keeps an index of sections as ranges over that line list.
Reading never touches the lines; editing rewrites only what it has to,
so comments, spacing and quoting elsewhere survive untouched.

    ```ini
    ; this comment survives any edit below
    key1 = value1

    [section name]  # so does this one
    k = v           ; `set_key('section name.k', 'x')` -> `k = x           ;`
    ```
"""

import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Callable, Iterator, TypeVar
from warnings import warn

from .consts import (
    DEFAULT_INDENT, FALSE_WORDS, INT64_MAX, INT64_MIN, TRUE_WORDS, UINT64_MAX,
    LineKind
)
from .dialect import PLAIN, Dialect
from .grammar import header_reads_back, key_reads_back, reads_back

__all__ = ['IniLine', 'IniSection', 'IniFile']

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(kw_only=True)
class IniLine:
    """One logical line. Key lines holding a multi-line quoted value
    span several physical lines.

    `str(line)` gives back exactly what was parsed, newline included.
    """
    kind: LineKind
    indent: str = ''
    # section lines: text between the brackets, as written.
    raw_name: str = ''
    # key lines: `{indent}{raw_key}={pre_value}{raw_value}{trailing}{comment}`
    raw_key: str = ''
    pre_value: str = ''
    raw_value: str = ''
    trailing: str = ''
    comment: str = ''

    @property
    def key(self) -> str:
        return self.raw_key.strip()

    def set_value(self, value: str) -> None:
        if self.kind is not LineKind.KEY:
            raise TypeError(f'not a key line: {str(self)!r}')
        self.raw_value = value

    def __str__(self) -> str:
        match self.kind:
            case LineKind.SECTION:
                body = f'[{self.raw_name}]'
            case LineKind.KEY:
                body = f'{self.raw_key}={self.pre_value}{self.raw_value}'
            case _:
                body = ''
        return f'{self.indent}{body}{self.trailing}{self.comment}\n'


@dataclass
class _SectionSpan:
    # header line index, None for the implicit top-level section.
    header: int | None
    # body range over IniFile._lines, end exclusive.
    start: int
    end: int
    raw_name: str
    name: str
    key_lines: list[int] = field(default_factory=list)


class IniSection(MutableMapping[str, str]):
    """Live view of one section, by resolved name.

    Reads go through the owning `IniFile`, writes are forwarded to
    `IniFile` mutations, so the view never goes stale after edits
    (unless the section itself gets renamed or removed).

    If the document declares the same section more than once,
    the view merges all of them; the first declaration of a key wins.
    """
    def __init__(self, owner: 'IniFile', name: str) -> None:
        self._owner = owner
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def raw_name(self) -> str:
        spans = self._owner._spans_for(self._name)
        return spans[0].raw_name if spans else ''

    def _lines(self) -> Iterator[IniLine]:
        for span in self._owner._spans_for(self._name):
            for i in span.key_lines:
                yield self._owner._lines[i]

    def keys(self) -> list[str]:  # type: ignore[override]
        """Resolved key names, in document order, without duplicates."""
        ret: dict[str, str] = {}
        for line in self._lines():
            ret.setdefault(line.key.lower(), line.key)
        return list(ret.values())

    def raw_keys(self) -> list[str]:
        """Key names as written (whitespace kept), in document order."""
        seen: set[str] = set()
        ret: list[str] = []
        for line in self._lines():
            if line.key.lower() not in seen:
                seen.add(line.key.lower())
                ret.append(line.raw_key)
        return ret

    def __getitem__(self, key: str) -> str:
        found = self._owner._find_key(self._name, key)
        if found is None:
            raise KeyError(key)
        return self._owner.dialect.value_func(self._owner._lines[found].raw_value)

    def __setitem__(self, key: str, value: str) -> None:
        self._owner._set(self._name, key, value)

    def __delitem__(self, key: str) -> None:
        if self._owner._find_key(self._name, key) is None:
            raise KeyError(key)
        self._owner._remove(self._name, key)

    def __contains__(self, key: object) -> bool:
        return (isinstance(key, str)
                and self._owner._find_key(self._name, key) is not None)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())

    def __str__(self) -> str:
        return f'[{self.raw_name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self))

    def get(self, key, converter: Callable[[str], object] = str,
            default=None):
        if key not in self:
            return default
        return converter(self[key])

    def to_dict(self) -> dict[str, str]:
        return {k: self[k] for k in self.keys()}


class IniFile(Mapping[str, IniSection]):
    """A whole INI document.

    Qualified keys address values across sections: `'key'` for the
    implicit top-level section, `'section.key'` otherwise, and
    `'section.sub.key'` with the `GIT` dialect.

    As a `Mapping`, it maps resolved section names to `IniSection` views.

    Not thread safe: at most one mutation in flight,
    reads only while no mutation is running.
    """
    def __init__(
        self, lines: list[IniLine] | None = None, *,
        filename: str | None = None,
        dialect: Dialect = PLAIN,
        encoding: str = 'utf-8'
    ) -> None:
        self._lines: list[IniLine] = list(lines) if lines else []
        self._dialect = dialect
        self._spans: list[_SectionSpan] = []
        self.filename = filename
        self.encoding = encoding
        self._ensure_anchor()
        self._reindex()

    # --- index ---

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @dialect.setter
    def dialect(self, value: Dialect) -> None:
        self._dialect = value
        self._reindex()

    def _reindex(self) -> None:
        name_func = self._dialect.name_func
        implicit = _SectionSpan(None, 0, len(self._lines), '', '')
        spans, cur = [implicit], implicit
        for i, line in enumerate(self._lines):
            match line.kind:
                case LineKind.SECTION:
                    cur.end = i
                    cur = _SectionSpan(
                        i, i + 1, len(self._lines),
                        line.raw_name, name_func(line.raw_name))
                    spans.append(cur)
                case LineKind.KEY:
                    cur.key_lines.append(i)
        self._spans = spans

    def _spans_for(self, logical: str) -> list[_SectionSpan]:
        wanted = self._dialect.normalize(logical)
        comp_func = self._dialect.comp_func
        return [i for i in self._spans if comp_func(i.name, wanted)]

    def _distinct_spans(self) -> list[_SectionSpan]:
        """First span of every section, as the dialect tells them apart."""
        comp_func = self._dialect.comp_func
        ret: list[_SectionSpan] = []
        for span in self._spans:
            if not any(comp_func(i.name, span.name) for i in ret):
                ret.append(span)
        return ret

    def _render_header(self, name: str, existing: str | None) -> str:
        ret = self._dialect.manip_func(name, existing)
        if not header_reads_back(ret):
            raise ValueError(f'invalid section name: {name!r}')
        return ret

    def _find_key(self, section: str, key: str) -> int | None:
        """Line index of the first `key` in any section matching `section`."""
        key = key.strip().lower()
        for span in self._spans_for(section):
            for i in span.key_lines:
                if self._lines[i].key.lower() == key:
                    return i
        return None

    def _is_anchor(self) -> bool:
        return (len(self._lines) == 1
                and self._lines[0].kind is LineKind.BLANK
                and str(self._lines[0]) == '\n')

    def _ensure_anchor(self) -> None:
        # an empty document still serializes as one blank line.
        if not self._lines:
            self._lines.append(IniLine(kind=LineKind.BLANK))

    def _drop_anchor(self) -> None:
        if self._is_anchor():
            self._lines.clear()
            self._reindex()

    def _eol_ws(self) -> str:
        """`'\\r'` for CRLF documents, so new lines match the old ones."""
        if self._lines and str(self._lines[0]).endswith('\r\n'):
            return '\r'
        return ''

    # --- read ---

    @property
    def lines(self) -> tuple[IniLine, ...]:
        return tuple(self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def section_names(self) -> list[str]:
        """Resolved names by first appearance, implicit section (`''`) first."""
        return [i.name for i in self._distinct_spans()]

    def raw_section_names(self) -> list[str]:
        return [i.raw_name for i in self._distinct_spans()]

    def get_section(self, name: str) -> IniSection | None:
        spans = self._spans_for(name)
        if not spans:
            return None
        return IniSection(self, spans[0].name)

    def has_key(self, qualified: str) -> bool:
        return self._find_key(*self._dialect.split_func(qualified)) is not None

    def get_key(self, qualified: str) -> str:
        """Value of a qualified key, `''` if either section or key is absent."""
        found = self._find_key(*self._dialect.split_func(qualified))
        if found is None:
            return ''
        return self._dialect.value_func(self._lines[found].raw_value)

    def __typed(
        self, qualified: str, converter: Callable[[str], T],
        zero: T, strict: bool
    ) -> T:
        raw = self.get_key(qualified)
        try:
            return converter(raw)
        except ValueError:
            if strict:
                raise
            logger.debug('%s = %r is not a valid %s, using %r',
                         qualified, raw, type(zero).__name__, zero)
            return zero

    def get_bool(self, qualified: str, *, strict: bool = False) -> bool:
        return self.__typed(qualified, _to_bool, False, strict)

    def get_int(self, qualified: str, *, strict: bool = False) -> int:
        return self.__typed(qualified, int, 0, strict)

    def get_int64(self, qualified: str, *, strict: bool = False) -> int:
        return self.__typed(
            qualified, _ranged_int(INT64_MIN, INT64_MAX), 0, strict)

    def get_uint64(self, qualified: str, *, strict: bool = False) -> int:
        return self.__typed(qualified, _ranged_int(0, UINT64_MAX), 0, strict)

    def get_float(self, qualified: str, *, strict: bool = False) -> float:
        return self.__typed(qualified, float, 0.0, strict)

    def get_map(self) -> dict[str, dict[str, str]]:
        """Values by resolved section and key. Keys are matched
        case-insensitively and the first occurrence wins, as in `get_key`."""
        ret: dict[str, dict[str, str]] = {}
        comp_func = self._dialect.comp_func
        value_func = self._dialect.value_func
        for head in self._distinct_spans():
            pairs = ret.setdefault(head.name, {})
            seen: set[str] = set()
            for span in self._spans:
                if not comp_func(span.name, head.name):
                    continue
                for i in span.key_lines:
                    line = self._lines[i]
                    if line.key.lower() not in seen:
                        seen.add(line.key.lower())
                        pairs[line.key] = value_func(line.raw_value)
        return ret

    def get_map_flat(self) -> dict[str, str]:
        ret: dict[str, str] = {}
        for section, pairs in self.get_map().items():
            for key, value in pairs.items():
                ret.setdefault(f'{section}.{key}' if section else key, value)
        return ret

    def __getitem__(self, name: str) -> IniSection:
        if (ret := self.get_section(name)) is None:
            raise KeyError(name)
        return ret

    def __iter__(self) -> Iterator[str]:
        return iter(self.section_names())

    def __len__(self) -> int:
        return len(self.section_names())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(self._spans_for(name))

    # --- mutate ---

    def _insert_at(self, span: _SectionSpan) -> int:
        """Right below the last non-blank line of the section."""
        for i in range(span.end - 1, span.start - 1, -1):
            if self._lines[i].kind is not LineKind.BLANK:
                return i + 1
        return span.start

    def _indent_for(self, span: _SectionSpan) -> str:
        if span.key_lines:
            return self._lines[span.key_lines[-1]].indent
        return '' if span.header is None else DEFAULT_INDENT

    def _set(self, section: str, key: str, value: str) -> None:
        if not key_reads_back(key):
            raise ValueError(f'invalid key name: {key!r}')
        if not reads_back(value):
            warn(f'"{value}" would not read back as the value of "{key}", '
                 'consider quoting it.')
        if (found := self._find_key(section, key)) is not None:
            self._lines[found].set_value(value)
            logger.debug('updated %r in [%s]', key, section)
            return

        if not self._spans_for(section):
            self.add_section(section)
        self._drop_anchor()
        # a custom dialect may not find its own header back.
        span = (self._spans_for(section) or self._spans[-1:])[0]
        self._lines.insert(self._insert_at(span), IniLine(
            kind=LineKind.KEY,
            indent=self._indent_for(span),
            raw_key=key.strip(),
            raw_value=value,
            trailing=self._eol_ws()))
        self._reindex()
        logger.debug('added %r to [%s]', key, span.name)

    def set_key(self, qualified: str, value: str) -> None:
        """Set a value, creating the key (and its section) when missing.

        An existing key keeps everything but its value substring:

            `  k1 = v1  ;comment` -> `  k1 = v2  ;comment`
        """
        self._set(*self._dialect.split_func(qualified), value)

    def add_section(self, name: str) -> IniSection | None:
        """Append a `[name]` header to the end of the document.

        No-op for `''` (the implicit section always exists)
        and for sections already present. Raises `ValueError` when the
        name cannot be written as a header, e.g. `'a]b'`.
        """
        if not name.strip():
            return None
        if (existing := self.get_section(name)) is not None:
            return existing
        raw_name = self._render_header(name, None)
        self._drop_anchor()
        self._lines.append(IniLine(
            kind=LineKind.SECTION,
            raw_name=raw_name,
            trailing=self._eol_ws()))
        self._reindex()
        logger.debug('added section [%s]', name)
        return self.get_section(name)

    def rename_section(self, old: str, new: str) -> None:
        """Rewrite the bracket interior of `old`'s header only.

        Keys, comments and whitespace around the brackets are kept.
        """
        spans = [i for i in self._spans_for(old) if i.header is not None]
        if not spans or not new.strip():
            return
        line = self._lines[spans[0].header]
        raw_name = self._render_header(new, line.raw_name)
        # only a header the old name did not already share counts.
        others = self._spans_for(new)
        if any(i.header is not None and i not in spans for i in others):
            warn(f'renaming [{old}] to [{new}], which already exists; '
                 'lookups will only see the first of them.')
        line.raw_name = raw_name
        self._reindex()
        logger.debug('renamed section [%s] -> [%s]', old, new)

    def __delete_lines(self, indexes: list[int]) -> None:
        for i in sorted(set(indexes), reverse=True):
            del self._lines[i]
        self._ensure_anchor()
        self._reindex()

    def remove_section(self, name: str) -> None:
        """Drop a section with its header and body.

        For the implicit section, only its key lines go away.
        """
        doomed: list[int] = []
        for span in self._spans_for(name):
            if span.header is None:
                doomed.extend(span.key_lines)
            else:
                doomed.extend(range(span.header, span.end))
        if doomed:
            self.__delete_lines(doomed)
            logger.debug('removed section [%s]', name)

    def _remove(self, section: str, key: str) -> None:
        key = key.strip().lower()
        doomed = [
            i for span in self._spans_for(section) for i in span.key_lines
            if self._lines[i].key.lower() == key
        ]
        if doomed:
            self.__delete_lines(doomed)
            logger.debug('removed %r from [%s]', key, section)

    def remove_key(self, qualified: str) -> None:
        """Drop every line of that key; surrounding blank lines stay."""
        self._remove(*self._dialect.split_func(qualified))

    def set_map(self, data: Mapping[str, Mapping[str, str]]) -> None:
        for section, pairs in data.items():
            if not pairs:
                self.add_section(section)
            for key, value in pairs.items():
                self._set(section, key, value)

    def set_map_flat(self, data: Mapping[str, str]) -> None:
        for qualified, value in data.items():
            self.set_key(qualified, value)

    # --- output ---

    def write_stream(self, fp) -> None:
        for i in self._lines:
            fp.write(str(i))

    def write(self, filename: str) -> None:
        # newline='' keeps CRLF documents byte-identical.
        with open(filename, 'w', encoding=self.encoding, newline='') as fp:
            self.write_stream(fp)

    def save(self) -> None:
        if not self.filename:
            raise OSError('no filename supplied')
        self.write(self.filename)

    def __str__(self) -> str:
        return ''.join(str(i) for i in self._lines)

    def __repr__(self) -> str:
        return '<IniFile %s { .sections = %d, .lines = %d }>' % (
            self.filename or '<memory>', len(self._spans), len(self._lines))


def _to_bool(raw: str) -> bool:
    word = raw.strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ValueError(f'invalid boolean: {raw!r}')


def _ranged_int(low: int, high: int) -> Callable[[str], int]:
    def convert(raw: str) -> int:
        ret = int(raw)
        if not low <= ret <= high:
            raise ValueError(f'{ret} out of range [{low}, {high}]')
        return ret
    return convert
