# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/10 01:15:56
# @Author : Kariko Lin

from enum import Enum

DEFAULT_SECTION = 'DEFAULT'

BOM = '\ufeff'

DEFAULT_COMMENT = '# '
ALTERNATIVE_COMMENT = '; '
DEFAULT_SEPARATOR = ':'
ALTERNATIVE_SEPARATOR = '='

# expansions allowed while unfolding `%(name)s` references.
MAX_DEPTH = 200

BOOL_STRINGS = {
    '1': True, 't': True, 'true': True, 'y': True, 'yes': True, 'on': True,
    '0': False, 'f': False, 'false': False, 'n': False, 'no': False,
    'off': False,
}


class IniMark(str, Enum):
    COMMENT = '#'
    ALT_COMMENT = ';'
    REM = 'rem'  # comment for windows users
    SECTION_OPEN = '['
    SECTION_CLOSE = ']'
    EQUALS = '='
    COLON = ':'


# a marker only starts an inline comment after blanks.
INLINE_COMMENTS = (' #', '\t#', ' ;', '\t;')
