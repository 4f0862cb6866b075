"""tests for the line-by-line reader and the writer."""

from io import StringIO

import pytest

from iniconf import IniConfig, IniParser, ParseError, dumps, loads
from iniconf.ini.consts import ALTERNATIVE_COMMENT, ALTERNATIVE_SEPARATOR


def _triples(store: IniConfig) -> set[tuple[str, str, str]]:
    return {
        (name, key, val)
        for name, section in store.items()
        for key, val in section.items()
    }


class TestReadStream:

    def test_sections_and_options(self):
        ins = loads('[server]\nhost = localhost\nport: 8080\n')
        assert ins['server'].to_dict() == {'host': 'localhost', 'port': '8080'}

    def test_final_line_without_newline(self):
        ins = loads('[s]\na = 1')
        assert ins.raw_value('s', 'a') == '1'

    def test_crlf_lines(self):
        ins = loads('[s]\r\na = 1\r\n  more\r\n')
        assert ins.raw_value('s', 'a') == '1\nmore'

    def test_blank_and_comment_lines_do_not_touch_store(self):
        text = '\n   \n# x = 1\n; y = 2\nrem z = 3\nREMARK = 4\nremote=1\n'
        ins = loads(text)
        assert ins.sections() == ['DEFAULT']
        assert len(ins['DEFAULT']) == 0

    def test_section_name_trimmed(self):
        ins = loads('[ foo ]\n')
        assert 'foo' in ins

    def test_inline_comment_stripped(self):
        ins = loads('[s]\na = 1 # comment\n')
        assert ins.raw_value('s', 'a') == '1'

    def test_colon_equals_alike(self):
        assert _triples(loads('[s]\na: 1\n')) == _triples(loads('[s]\na = 1\n'))

    def test_continuation(self):
        ins = loads('a = 1\n  more\n')
        assert ins.raw_value('DEFAULT', 'a') == '1\nmore'

    def test_continuation_strips_comment(self):
        ins = loads('[s]\na = 1\n  two ; note\n  three\n')
        assert ins.raw_value('s', 'a') == '1\ntwo\nthree'

    def test_section_header_resets_continuation(self):
        with pytest.raises(ParseError) as e:
            loads('[s1]\na=1\n[s2]\nmore\n')
        assert e.value.line == 'more'

    def test_reset_keeps_previous_value(self):
        ins = IniConfig()
        with pytest.raises(ParseError):
            loads('[s1]\na=1\n[s2]\nmore\n', ins)
        # partial state stays observable
        assert ins.raw_value('s1', 'a') == '1'
        assert 's2' in ins

    def test_garbage(self):
        with pytest.raises(ParseError) as e:
            loads('garbage\n')
        assert e.value.line == 'garbage'
        assert str(e.value) == 'could not parse line: garbage'

    def test_overwrite(self):
        ins = loads('[s]\na=1\na=2\n')
        assert ins.raw_value('s', 'a') == '2'
        assert len(ins['s']) == 1

    def test_duplicate_header_reopens(self):
        ins = loads('[s]\na=1\n[t]\nb=2\n[s]\nc=3\n')
        assert ins['s'].to_dict() == {'a': '1', 'c': '3'}
        assert ins.sections() == ['DEFAULT', 's', 't']

    def test_headerless_pairs_go_to_default(self):
        ins = loads('a = 1\n[s]\nb = 2\n')
        assert ins.raw_value('DEFAULT', 'a') == '1'
        # and back the other sections
        assert ins.raw_value('s', 'a') == '1'

    def test_empty_header_is_default(self):
        ins = loads('[]\na = 1\n  more\n')
        assert ins.raw_value('DEFAULT', 'a') == '1\nmore'

    def test_into_existing_store(self):
        ins = IniConfig(case_sensitive=False)
        ins.add_option('s', 'keep', 'yes')
        IniParser.readstream(StringIO('[S]\nNew = 1\n'), ins)
        assert ins.raw_value('s', 'new') == '1'
        assert ins.raw_value('s', 'keep') == 'yes'

    def test_read_error_propagates(self):
        class Broken:
            def __init__(self):
                self.lines = iter(['[s]\n', 'a = 1\n'])

            def readline(self):
                try:
                    return next(self.lines)
                except StopIteration:
                    raise OSError('device gone') from None

        ins = IniConfig()
        with pytest.raises(OSError, match='device gone'):
            IniParser.readstream(Broken(), ins)
        assert ins.raw_value('s', 'a') == '1'


class TestWriteStream:

    def test_default_format(self):
        ins = loads('[s]\na = 1\n')
        assert dumps(ins) == '\n[s]\na : 1\n'

    def test_custom_separator(self):
        ins = IniConfig(separator=ALTERNATIVE_SEPARATOR, pre_space=False, post_space=False)
        ins.add_option('s', 'a', '1')
        assert dumps(ins) == '\n[s]\na=1\n'

    def test_header_comment(self):
        ins = IniConfig(comment=ALTERNATIVE_COMMENT)
        assert dumps(ins, 'first\nsecond') == '; first\n; second\n'

    def test_default_section_written_when_not_empty(self):
        ins = loads('a = 1\n')
        assert dumps(ins) == '\n[DEFAULT]\na : 1\n'

    def test_multiline_value(self):
        ins = loads('[s]\na = 1\n  more\n')
        assert dumps(ins) == '\n[s]\na : 1\n\tmore\n'

    def test_key_that_reads_back_as_section(self):
        ins = loads('[k = v] ;c\n')
        assert ins.raw_value('DEFAULT', '[k') == 'v]'
        with pytest.raises(ValueError, match=r'\[k'):
            dumps(ins)

    def test_key_that_reads_back_as_comment(self):
        ins = IniConfig()
        ins.add_option('s', 'remote', '1')
        with pytest.raises(ValueError, match='remote'):
            dumps(ins)

    def test_round_trip(self):
        text = (
            'top = level\n'
            '[server]\n'
            'host = localhost  ; who\n'
            'url: http://h/#top\n'
            'motd = hello\n'
            '  world\n'
            '[ Empty ]\n'
            '[server]\n'
            'port = 80\n'
        )
        first = loads(text)
        second = loads(dumps(first, 'generated'))
        assert _triples(first) == _triples(second)
        assert dumps(first) == dumps(second)
        assert second.raw_value('server', 'motd') == 'hello\nworld'
        assert 'Empty' in second
