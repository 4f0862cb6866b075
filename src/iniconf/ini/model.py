# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI Structure, with a default section backing every other one.

As for reading and writing files, just see `ini.parser`.
"""

import re
from collections.abc import Iterator, Mapping, MutableMapping

from .consts import (
    BOOL_STRINGS,
    DEFAULT_COMMENT,
    DEFAULT_SECTION,
    DEFAULT_SEPARATOR,
    MAX_DEPTH
)

_VARIABLE = re.compile(r'%\(([a-zA-Z0-9_.\-]+)\)s')


class NoSectionError(KeyError):
    def __init__(self, section: str) -> None:
        super().__init__(section)
        self.section = section

    def __str__(self) -> str:
        return f'section not found: {self.section}'


class NoOptionError(KeyError):
    def __init__(self, section: str, option: str) -> None:
        super().__init__(section, option)
        self.section = section
        self.option = option

    def __str__(self) -> str:
        return f'option not found: [{self.section}] {self.option}'


class InterpolationDepthError(ValueError):
    """Raised when `%(name)s` references keep unfolding, likely a cycle."""
    def __init__(self, section: str, option: str) -> None:
        super().__init__(
            f'possible cycle while unfolding [{section}] {option}: '
            f'max depth of {MAX_DEPTH}')
        self.section = section
        self.option = option


class IniSection(MutableMapping[str, str]):
    """INI 小节字典。维护一个小节的全部键值对，保持插入顺序。

    所有键值对均*应该*是`str: str`类型（哪怕值为空串），
    但由于 Python 的动态类型性质，运行时并不会对此作出限制。

    `case_sensitive=False` 时按小写比较键名，但保存文件时仍使用首次出现的写法。
    """
    def __init__(
        self, section_name: str, /,
        pairs: Mapping[str, str] | None = None, *,
        case_sensitive: bool = True
    ) -> None:
        self._name = section_name
        self._case_sensitive = case_sensitive
        self.__data: dict[str, str] = {}
        # folded key -> original key, for saving files
        self.__keyproxy: dict[str, str] = {}
        if pairs:
            self.update(pairs)

    @property
    def name(self) -> str:
        return self._name

    def _fold(self, key: str) -> str:
        return key if self._case_sensitive else key.lower()

    def __getitem__(self, key: str) -> str:
        return self.__data[self._fold(key)]

    def __setitem__(self, key: str, value: str) -> None:
        self.__keyproxy.setdefault(self._fold(key), key)
        self.__data[self._fold(key)] = value

    def __delitem__(self, key: str) -> None:
        del self.__data[self._fold(key)]
        del self.__keyproxy[self._fold(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fold(key) in self.__data

    def __len__(self) -> int:
        return len(self.__data)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__keyproxy.values())

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self.__data))

    def to_dict(self) -> dict[str, str]:
        return dict(self.items())


class IniConfig(MutableMapping[str, IniSection]):
    """INI 文件表示。支持以下形式的小节和键值对：

        ```ini
        key = val  ; 不属于任何小节的键值对归入默认小节（`DEFAULT`）。

        [section]
        key233 = val666
        path: %(key233)s/bin  ; 用 get_string() 展开
        multi = first line
            second line
        ```

    默认小节始终存在，其他小节查不到的键会回落到这里。
    格式相关的选项（注释前缀、分隔符）只在保存文件时生效。
    """
    def __init__(
        self, *,
        default_section: str = DEFAULT_SECTION,
        case_sensitive: bool = True,
        comment: str = DEFAULT_COMMENT,
        separator: str = DEFAULT_SEPARATOR,
        pre_space: bool = True,
        post_space: bool = True
    ) -> None:
        self.__default = default_section
        self.__case_sensitive = case_sensitive
        self.comment = comment
        self.separator = (
            (' ' if pre_space else '')
            + separator
            + (' ' if post_space else ''))
        self.__raw: dict[str, IniSection] = {}
        self.add_section(default_section)

    @property
    def default_section(self) -> str:
        return self.__default

    @property
    def case_sensitive(self) -> bool:
        return self.__case_sensitive

    def _fold(self, key: str) -> str:
        return key if self.__case_sensitive else key.lower()

    def __getitem__(self, key: str) -> IniSection:
        try:
            return self.__raw[self._fold(key)]
        except KeyError:
            raise NoSectionError(key) from None

    def __setitem__(
        self, key: str, value: IniSection | Mapping[str, str]
    ) -> None:
        # shouldn't keep ptr to external dict in key setting operation.
        name = self[key].name if key in self else key
        self.__raw[self._fold(key)] = IniSection(
            name, value, case_sensitive=self.__case_sensitive)

    def __delitem__(self, key: str) -> None:
        if self._fold(key) == self._fold(self.__default):
            raise ValueError(
                f'default section [{self.__default}] cannot be removed')
        try:
            del self.__raw[self._fold(key)]
        except KeyError:
            raise NoSectionError(key) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fold(key) in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return (i.name for i in self.__raw.values())

    def __repr__(self) -> str:
        return 'IniConfig(%s)' % ', '.join(
            repr(i) for i in self.__raw.values())

    def clear(self) -> None:
        self.__raw.clear()
        self.add_section(self.__default)

    def add_section(self, section: str) -> bool:
        """Add `section` if absent. An empty name means the default section.

        Returns `False` if it already existed.
        """
        section = section or self.__default
        if section in self:
            return False
        self.__raw[self._fold(section)] = IniSection(
            section, case_sensitive=self.__case_sensitive)
        return True

    def add_option(self, section: str, option: str, value: str) -> bool:
        """Set `option` in `section`, creating the section as needed.

        Returns `True` if the option was new, `False` if it got overwritten.
        """
        section = section or self.__default
        self.add_section(section)
        is_new = option not in self[section]
        self[section][option] = value
        return is_new

    def remove_section(self, section: str) -> bool:
        if section not in self:
            return False
        if self._fold(section) == self._fold(self.__default):
            return False
        del self[section]
        return True

    def remove_option(self, section: str, option: str) -> bool:
        if section not in self or option not in self[section]:
            return False
        del self[section][option]
        return True

    def sections(self) -> list[str]:
        return list(self)

    def has_section(self, section: str) -> bool:
        return section in self

    def has_option(self, section: str, option: str) -> bool:
        """Whether `option` resolves in `section`, default section included."""
        if section not in self:
            return False
        return option in self[section] or option in self[self.__default]

    def options(self, section: str) -> list[str]:
        """Options of `section`, followed by inherited default ones."""
        ret = dict.fromkeys(self[section])
        if self._fold(section) != self._fold(self.__default):
            for i in self[self.__default]:
                if i not in self[section]:
                    ret.setdefault(i)
        return list(ret)

    def raw_value(self, section: str, option: str) -> str:
        """Value as stored, looked up in `section` then the default section."""
        section = section or self.__default
        if option in self[section]:
            return self[section][option]
        if option in self[self.__default]:
            return self[self.__default][option]
        raise NoOptionError(section, option)

    def get_string(self, section: str, option: str) -> str:
        """Value with every `%(name)s` reference unfolded.

        References resolve like `raw_value()`, against the same section.
        """
        value = self.raw_value(section, option)
        for _ in range(MAX_DEPTH):
            if (ref := _VARIABLE.search(value)) is None:
                return value
            value = value.replace(
                ref.group(0), self.raw_value(section, ref.group(1)))
        raise InterpolationDepthError(section, option)

    def get_int(self, section: str, option: str) -> int:
        return int(self.get_string(section, option))

    def get_float(self, section: str, option: str) -> float:
        return float(self.get_string(section, option))

    def get_bool(self, section: str, option: str) -> bool:
        value = self.get_string(section, option)
        try:
            return BOOL_STRINGS[value.lower()]
        except KeyError:
            raise ValueError(f'could not parse bool value: {value}') from None

    def merge(self, another: 'IniConfig') -> None:
        """To merge `another` into self, overriding existing options.

        The default section of `another` lands in our default section.
        """
        for name, section in another.items():
            if another._fold(name) == another._fold(another.default_section):
                name = self.__default
            self.add_section(name)
            for key, val in section.items():
                self.add_option(name, key, val)
