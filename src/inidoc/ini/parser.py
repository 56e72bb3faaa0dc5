# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/18 16:25:19
# @Author : inidoc contributors

"""Permissive, lossless INI reader.

One physical line is one of (first match wins):

1. blank: whitespace only;
2. comment: `;` or `#` after optional whitespace;
3. section header: `[name]`, then optional whitespace and comment.
A quoted run inside the brackets may hold `]`;
4. key/value: `key = value`, then optional whitespace and comment.
A value opening with `"` runs up to the closing quote,
even across line breaks, so it may hold `;`, `#` and newlines.

Anything else is a `ParseError`, and no document is produced.
"""

import logging
from io import TextIOBase
from os.path import exists
from typing import BinaryIO, TextIO

import chardet

from ..abstract import FileHandler
from .consts import COMMENT_MARKS, WHITESPACE, LineKind
from .dialect import PLAIN, Dialect
from .grammar import scan_header, scan_key, scan_value, skip_ws
from .model import IniFile, IniLine

__all__ = [
    'ParseError', 'parse', 'IniFileParser',
    'load', 'load_string', 'load_file', 'new_file',
]

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when the text does not match the INI grammar."""
    def __init__(
        self, message: str, source: str = '<string>',
        lineno: int = 0, line: str = ''
    ) -> None:
        self.message = message
        self.source = source
        self.lineno = lineno
        self.line = line
        super().__init__(
            f'unable to parse {source}: line {lineno}: {message}: {line!r}')


class _Scanner:
    def __init__(self, text: str, source: str) -> None:
        if not text.endswith('\n'):
            text += '\n'
        self._text = text
        self._source = source
        self._pos = 0
        self._lineno = 1

    def __error(self, message: str) -> ParseError:
        end = self._text.find('\n', self._pos)
        return ParseError(
            message, self._source, self._lineno, self._text[self._pos:end])

    def scan(self) -> list[IniLine]:
        ret: list[IniLine] = []
        while self._pos < len(self._text):
            start = self._pos
            ret.append(self.__line())
            self._lineno += self._text.count('\n', start, self._pos)
        return ret

    def __line(self) -> IniLine:
        text, pos = self._text, self._pos
        eol = text.index('\n', pos)
        body = skip_ws(text, pos)
        indent = text[pos:body]

        if body == eol:
            ret = IniLine(kind=LineKind.BLANK, indent=indent)
        elif text[body] in COMMENT_MARKS:
            ret = IniLine(
                kind=LineKind.COMMENT, indent=indent, comment=text[body:eol])
        elif text[body] == '[':
            ret = self.__header(indent, body, eol)
        else:
            ret, eol = self.__pair(indent, body)
        self._pos = eol + 1
        return ret

    def __tail(self, i: int, eol: int) -> tuple[str, str]:
        """Whitespace and comment after a construct, up to end of line."""
        j = skip_ws(self._text, i)
        if j < eol and self._text[j] not in COMMENT_MARKS:
            raise self.__error(
                f'unexpected {self._text[j]!r} at column {j - self._pos + 1}')
        return self._text[i:j], self._text[j:eol]

    def __header(self, indent: str, body: int, eol: int) -> IniLine:
        line = self._text[:eol]
        if (close := scan_header(line, body)) is None:
            raise self.__error('unterminated section header')
        trailing, comment = self.__tail(close + 1, eol)
        return IniLine(
            kind=LineKind.SECTION, indent=indent,
            raw_name=line[body + 1:close],
            trailing=trailing, comment=comment)

    def __pair(self, indent: str, body: int) -> tuple[IniLine, int]:
        text = self._text
        if (eq := scan_key(text, body)) is None:
            raise self.__error('expected "key = value", section or comment')
        if not text[body:eq].strip():
            raise self.__error('missing key before "="')

        value = skip_ws(text, eq + 1)
        if (end := scan_value(text, value)) is None:
            raise self.__error('unterminated quoted value')
        raw = text[value:end]
        stripped = raw.rstrip(WHITESPACE)

        eol = text.index('\n', end)
        trailing, comment = self.__tail(value + len(stripped), eol)
        return IniLine(
            kind=LineKind.KEY, indent=indent,
            raw_key=text[body:eq],
            pre_value=text[eq + 1:value],
            raw_value=stripped,
            trailing=trailing, comment=comment), eol


def parse(text: str, source: str = '<string>') -> list[IniLine]:
    """Split `text` into classified lines.

    A missing final newline is added first, so `''` gives one blank line.
    """
    ret = _Scanner(text, source).scan()
    logger.debug('parsed %s: %d lines', source, len(ret))
    return ret


def _decode(raw: bytes, encoding: str | None = None) -> tuple[str, str]:
    """Returns the text and the codec that actually decoded it."""
    if encoding is not None:
        try:
            return raw.decode(encoding), encoding
        except UnicodeDecodeError:
            logger.warning('not %s encoded, guessing the codec', encoding)

    codec = chardet.detect(raw)
    if codec['encoding'] is None or codec['confidence'] < 0.8:
        codec = {'encoding': 'utf-8'}

    # fallbacks
    try:
        return raw.decode(codec['encoding']), codec['encoding']
    except (UnicodeDecodeError, LookupError):
        logger.warning('unable to guess the codec, falling back to latin-1')
        return raw.decode('latin-1'), 'latin-1'


class IniFileParser(FileHandler[IniFile]):
    """Reads and writes one INI file on disk.

    `encoding=None` means UTF-8 first, then whatever `chardet` guesses.
    """
    def __init__(
        self, filename: str, encoding: str | None = None, *,
        dialect: Dialect = PLAIN
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._dialect = dialect

    @staticmethod
    def readstream(
        buf: TextIO | BinaryIO | TextIOBase, source: str = '<stream>', *,
        dialect: Dialect = PLAIN, encoding: str | None = None
    ) -> IniFile:
        """Read a text or byte stream. Bytes are decoded as `_decode` does."""
        data = buf.read()
        codec = encoding or 'utf-8'
        if isinstance(data, bytes):
            data, codec = _decode(data, encoding or 'utf-8')
        return IniFile(parse(data, source), dialect=dialect, encoding=codec)

    def read(self) -> IniFile:
        """Read the file. A missing file gives an empty document bound to it."""
        if not exists(self._fn):
            logger.info('%s not found, starting an empty document', self._fn)
            return IniFile(filename=self._fn, dialect=self._dialect,
                           encoding=self._codec or 'utf-8')
        with open(self._fn, 'rb') as fp:
            raw = fp.read()
        text, codec = _decode(raw, self._codec or 'utf-8')
        # decoded from bytes, so CRLF survives in the lines themselves.
        return IniFile(parse(text, self._fn), filename=self._fn,
                       dialect=self._dialect, encoding=codec)

    def write(self, instance: IniFile) -> None:
        with open(self._fn, 'w', encoding=self._codec or instance.encoding,
                  newline='') as fp:
            instance.write_stream(fp)

    def __str__(self) -> str:
        return 'INI file: ' + super().__str__() + f' ({self._codec})'


def load(
    stream: TextIO | BinaryIO | TextIOBase, *, dialect: Dialect = PLAIN
) -> IniFile:
    return IniFileParser.readstream(stream, '<stream>', dialect=dialect)


def load_string(text: str, *, dialect: Dialect = PLAIN) -> IniFile:
    return IniFile(parse(text, '<string>'), dialect=dialect)


def load_file(
    filename: str, *, encoding: str | None = None, dialect: Dialect = PLAIN
) -> IniFile:
    """Load a file from disk. A missing file gives an empty document
    that remembers `filename`, ready for `IniFile.save()`."""
    return IniFileParser(filename, encoding, dialect=dialect).read()


def new_file(*, dialect: Dialect = PLAIN) -> IniFile:
    return IniFile(dialect=dialect)
