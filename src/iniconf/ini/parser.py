# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Reading INI text into an `IniConfig`, and writing it back.

The reader works line by line on any text stream with `readline()`,
see `IniParser.readstream()`. The stream stays open afterwards.
Nothing is rolled back on errors: whatever was read so far stays in the store.
"""

import logging
from dataclasses import dataclass
from io import StringIO
from os import PathLike
from typing import TextIO

import chardet
import yaml

from ..abstract import FileHandler
from .lexer import (
    Blank,
    Comment,
    Continuation,
    Invalid,
    KeyValue,
    Section,
    classify
)
from .consts import BOM
from .model import IniConfig


class ParseError(ValueError):
    """A line that is neither comment, section, option nor continuation."""
    def __init__(self, line: str) -> None:
        super().__init__(f'could not parse line: {line}')
        self.line = line


@dataclass
class _ReadState:
    section: str
    option: str = ''


class IniParser(FileHandler[IniConfig]):
    @staticmethod
    def readstream(buf: TextIO, ins: IniConfig | None = None) -> IniConfig:
        """读取解码好的字符串流，写入`ins`（缺省则新建）并返回。

        如没有特殊需求，直接调用`self.read()`便是。

        Raises:
            ParseError: on a line of unknown shape.
            OSError: whatever `buf.readline()` raises.
        """
        if ins is None:
            ins = IniConfig()
        # pairs ahead of any header go to the default section.
        state = _ReadState(ins.default_section)
        # editors on windows like to open the file with a BOM.
        line = buf.readline().removeprefix(BOM)
        while line:
            match classify(line, bool(state.section), bool(state.option)):
                case Blank() | Comment():
                    pass
                case Section(name=name):
                    ins.add_section(name)
                    state.section = name or ins.default_section
                    state.option = ''  # reset multi-line value
                case KeyValue(key=key, value=value):
                    ins.add_option(state.section, key, value)
                    state.option = key
                case Continuation(text=text):
                    prev = ins.raw_value(state.section, state.option)
                    ins.add_option(
                        state.section, state.option, f'{prev}\n{text}')
                case Invalid(raw=raw):
                    raise ParseError(raw)
            line = buf.readline()
        return ins

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        encoding = codec['encoding']
        if encoding is None or codec['confidence'] < 0.8:
            encoding = 'utf-8'
        logging.warning(f'Decoding `{filename}` as {encoding} (guessed).')

        # fallbacks
        try:
            buf = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode('gbk')
        return StringIO(buf)

    def read(self, instance: IniConfig | None = None) -> IniConfig:
        """读取`IniParser`实例指定的文件。

        `instance` lets a caller pick store options (case policy,
        separator...) or stack several files into one store.
        """
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                ret = self.readstream(fp, instance)
        except UnicodeDecodeError:
            ret = self.readstream(self._decode_file(self._fn), instance)
        logging.debug(f'{len(ret)} sections read from `{self._fn}`.')
        return ret

    @staticmethod
    def writestream(
        instance: IniConfig, fp: TextIO, header: str | None = None
    ) -> None:
        """Dump `instance` as INI text.

        `header` goes first, as comment lines. An empty default section
        is skipped. Multi-line values continue on TAB-indented lines.

        Raises:
            ValueError: on an option that would not read back as itself,
                e.g. `[k` valued `v]` or `remote`.
        """
        if header:
            fp.write(
                instance.comment
                + header.replace('\n', '\n' + instance.comment)
                + '\n')
        default = instance[instance.default_section]
        for section in instance.values():
            if section is default and not section:
                continue
            fp.write(f'\n[{section.name}]\n')
            for key, val in section.items():
                first, *_ = val.split('\n', 1)
                line = f'{key}{instance.separator}{first}'
                match classify(line, True, False):
                    case KeyValue(key=parsed) if parsed == key:
                        pass
                    case _:
                        raise ValueError(
                            f'option "{key}" in {section} '
                            'cannot be written as INI text')
                val = val.replace('\n', '\n\t')
                fp.write(f'{key}{instance.separator}{val}\n')

    def write(self, instance: IniConfig, header: str | None = None) -> None:
        """保存到`IniParser`实例指定的文件（覆盖）。"""
        with open(self._fn, 'w', encoding=self._codec) as fp:
            self.writestream(instance, fp, header)
        logging.debug(f'{len(instance)} sections written to `{self._fn}`.')

    def __str__(self) -> str:
        return 'INI file: ' + super().__str__() + f' ({self._codec})'


class IniYamlParser(FileHandler[IniConfig]):
    """The same store as `{section: {option: value}}` YAML mappings."""
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename, encoding)

    def read(self, instance: IniConfig | None = None) -> IniConfig:
        if instance is None:
            instance = IniConfig()
        with open(self._fn, 'r', encoding=self._codec) as fp:
            data = yaml.safe_load(fp) or {}
        if not isinstance(data, dict):
            raise TypeError(
                f'`{self._fn}` should hold a mapping of sections, '
                f'got {type(data).__name__}')
        for section, pairs in data.items():
            # may there be some pure digits considered as int
            section = str(section)
            instance.add_section(section)
            if pairs is None:
                continue
            if not isinstance(pairs, dict):
                raise TypeError(
                    f'section "{section}" in `{self._fn}` should be '
                    f'a mapping of options, got {type(pairs).__name__}')
            for key, val in pairs.items():
                instance.add_option(
                    section, str(key), '' if val is None else str(val))
        return instance

    def write(self, instance: IniConfig) -> None:
        default = instance[instance.default_section]
        data = {
            section.name: section.to_dict()
            for section in instance.values()
            if section is not default or section
        }
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(
                data, fp,
                allow_unicode=True,
                default_flow_style=False,
                sort_keys=False)


def read_default(filename: str | PathLike[str]) -> IniConfig:
    """Read `filename` into a store with default options."""
    return IniParser(filename).read()


def loads(text: str, instance: IniConfig | None = None) -> IniConfig:
    return IniParser.readstream(StringIO(text), instance)


def dumps(instance: IniConfig, header: str | None = None) -> str:
    buf = StringIO()
    IniParser.writestream(instance, buf, header)
    return buf.getvalue()
