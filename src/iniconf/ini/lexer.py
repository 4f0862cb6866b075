# -*- encoding: utf-8 -*-
# @File   : lexer.py
# @Time   : 2024/10/12 22:41:07
# @Author : Kariko Lin

"""Line classification for INI text.

Every raw line turns into exactly one token below. Whether a bare line
continues the previous value depends on the reader's state, so that state
comes in as two flags and the store is never touched here:

    ```ini
    ; comment           -> Comment
    rem also a comment  -> Comment
    [ section ]         -> Section('section')
    key = val  # note   -> KeyValue('key', 'val')
        more text       -> Continuation('more text') / Invalid
    ```
"""

from dataclasses import dataclass

from .consts import INLINE_COMMENTS, IniMark


@dataclass(frozen=True, slots=True)
class Blank:
    pass


@dataclass(frozen=True, slots=True)
class Comment:
    text: str


@dataclass(frozen=True, slots=True)
class Section:
    name: str


@dataclass(frozen=True, slots=True)
class KeyValue:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class Continuation:
    text: str


@dataclass(frozen=True, slots=True)
class Invalid:
    raw: str


type Token = Blank | Comment | Section | KeyValue | Continuation | Invalid


def strip_comments(text: str) -> str:
    """Cut `text` at the first `#` or `;` preceded by a space or TAB.

    Markers glued to other characters are kept, e.g. `http://host/#top`.
    """
    for mark in INLINE_COMMENTS:
        if (i := text.find(mark)) != -1:
            text = text[:i]
    return text


def find_delimiter(line: str) -> int:
    """Index of the first `=` or `:`, or -1."""
    found = [
        i for i in (line.find(IniMark.EQUALS), line.find(IniMark.COLON))
        if i != -1
    ]
    return min(found, default=-1)


def classify(line: str, has_section: bool, has_option: bool) -> Token:
    line = line.strip()
    if not line:
        return Blank()
    if line[0] in (IniMark.COMMENT, IniMark.ALT_COMMENT):
        return Comment(line)
    # NOTE: no word boundary, `remote = 1` is a comment as well.
    if line[:3].lower() == IniMark.REM:
        return Comment(line)
    if line[0] == IniMark.SECTION_OPEN and line[-1] == IniMark.SECTION_CLOSE:
        return Section(line[1:-1].strip())

    # an empty key (`= val`) is not an option.
    if (i := find_delimiter(line)) > 0:
        return KeyValue(
            line[:i].strip(),
            strip_comments(line[i + 1:]).strip())
    if has_section and has_option:
        return Continuation(strip_comments(line).strip())
    return Invalid(line)
