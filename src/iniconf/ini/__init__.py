# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : Kariko Lin

from .lexer import strip_comments, classify
from .model import (
    IniSection,
    IniConfig,
    NoSectionError,
    NoOptionError,
    InterpolationDepthError
)
from .parser import (
    IniParser,
    IniYamlParser,
    ParseError,
    read_default,
    loads,
    dumps
)
