# -*- encoding: utf-8 -*-
# @File   : grammar.py
# @Time   : 2026/10/18 15:11:48
# @Author : inidoc contributors

"""Scanning primitives shared by the parser and the document model.

Every scanner takes the source text and a start offset,
and returns the offset where its construct ends (exclusive).
`None` means the construct is not terminated.
"""

from .consts import COMMENT_MARKS, ESCAPE, QUOTE, WHITESPACE


def skip_ws(text: str, i: int) -> int:
    n = len(text)
    while i < n and text[i] in WHITESPACE:
        i += 1
    return i


def scan_quoted(text: str, i: int) -> int | None:
    """`text[i]` is the opening quote. May run across several lines."""
    i, n = i + 1, len(text)
    while i < n:
        if text[i] == ESCAPE:
            i += 2
        elif text[i] == QUOTE:
            return i + 1
        else:
            i += 1
    return None


def scan_unquoted(text: str, i: int) -> int:
    """Runs up to an unescaped comment mark or the end of line."""
    n = len(text)
    while i < n and text[i] != '\n' and text[i] not in COMMENT_MARKS:
        # an escape never swallows the line break.
        if text[i] == ESCAPE and i + 1 < n and text[i + 1] != '\n':
            i += 2
        else:
            i += 1
    return i


def scan_value(text: str, i: int) -> int | None:
    if text.startswith(QUOTE, i):
        if (i := scan_quoted(text, i)) is None:
            return None
    return scan_unquoted(text, i)


def scan_key(text: str, i: int) -> int | None:
    """Returns the offset of `=`, if the key is terminated by one."""
    n = len(text)
    while i < n and text[i] != '=':
        if text[i] == '\n' or text[i] in COMMENT_MARKS:
            return None
        i += 1
    return i if i < n else None


def scan_header(line: str, i: int) -> int | None:
    """`line[i]` is `[`. Returns the offset of the matching `]`.

    Quoted runs inside the brackets are skipped,
    so `[remote "a]b"]` names `remote "a]b"`.
    """
    i, n = i + 1, len(line)
    while i < n:
        if line[i] == ']':
            return i
        if line[i] == QUOTE:
            if (i := scan_quoted(line, i)) is None:
                return None
        else:
            i += 1
    return None


def reads_back(value: str) -> bool:
    """Whether `value` written after `=` parses back as one whole value."""
    value = value.strip(WHITESPACE)
    return scan_value(value, 0) == len(value)


def key_reads_back(key: str) -> bool:
    """Whether `key` written before `=` parses back as that key."""
    key = key.strip(WHITESPACE)
    if not key or key[0] == '[':
        return False
    return scan_key(key + '=', 0) == len(key)


def header_reads_back(raw_name: str) -> bool:
    """Whether `[raw_name]` parses back as a header with that interior."""
    return ('\n' not in raw_name
            and scan_header(f'[{raw_name}]', 0) == len(raw_name) + 1)
