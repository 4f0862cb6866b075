# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2023/11/14 20:01:52
# @Author : Chloride

import logging

from .ini import (
    IniConfig, IniSection, IniParser, IniYamlParser,
    ParseError, NoSectionError, NoOptionError, InterpolationDepthError,
    read_default, loads, dumps
)

__all__ = [
    'IniConfig', 'IniSection', 'IniParser', 'IniYamlParser',
    'ParseError', 'NoSectionError', 'NoOptionError',
    'InterpolationDepthError',
    'read_default', 'loads', 'dumps'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
