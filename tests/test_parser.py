"""
Parser tests: the worked scenarios, error reporting and the lazy views.
"""
import logging
from io import StringIO

import pytest

import pycni
from pycni import (
    CniOpts, CniParser, ErrorKind, StructuralError, TypeMismatchError,
    ValueStyle
)

# ==========================================
# 1. Scenarios
# ==========================================

def test_default_section_entry():
    doc = pycni.loads('key = value')
    assert list(doc.header) == ['key']
    assert doc.get_string('', 'key') == 'value'
    assert len(doc) == 1


def test_named_section_boolean():
    doc = pycni.loads('[section]\nkey = true')
    assert list(doc) == ['', 'section']
    assert len(doc['section']) == 1
    assert doc.get_boolean('section', 'key') is True


def test_more_keys_decides_key_charset():
    text = '[s]\nport:http = 80\n'
    with pytest.raises(StructuralError) as info:
        pycni.loads(text)
    assert info.value.kind is ErrorKind.INVALID_KEY
    assert info.value.pos == (2, 1)
    assert 'more-keys' in str(info.value)

    doc = pycni.loads(text, CniOpts(more_keys=True))
    assert doc.get_integer('s', 'port:http') == 80


def test_duplicate_key_names_both_positions():
    with pytest.raises(StructuralError) as info:
        pycni.loads('[s]\n  k = 1\nj = 2\nk = 3\n')
    err = info.value
    assert err.kind is ErrorKind.DUPLICATE_KEY
    assert err.pos == (4, 1)
    assert err.original == (2, 3)
    assert str(err) == (
        "line 4:1: duplicate key: 'k' in [s] (first declared at line 2:3)")


def test_integer_reading_of_text_and_list():
    doc = pycni.loads('a = abc\nb = [1, 2]\n')
    with pytest.raises(TypeMismatchError):
        doc.get_integer('', 'a')
    with pytest.raises(TypeMismatchError):
        doc.get_integer('', 'b')


# ==========================================
# 2. Structure
# ==========================================

def test_order_is_kept(sample_text):
    doc = pycni.loads(sample_text)
    assert list(doc) == ['', 'server', 'server.tls']
    assert list(doc['server']) == [
        'host', 'port', 'debug', 'ratio', 'tags', 'motd']


def test_values_keep_their_spelling():
    doc = pycni.loads('a = 007\nb = True\nc = +1.50\n')
    assert [v.text for v in doc.header.values()] == ['007', 'True', '+1.50']
    assert doc.get_integer('', 'a') == 7
    assert doc.header['a'].text == '007'


def test_positions(sample_text):
    doc = pycni.loads(sample_text)
    assert doc['server'].entry('port').pos == (6, 1)
    assert (doc['server'].line, doc['server'].col) == (4, 1)
    assert doc['server.tls'].entry('enabled').pos == (14, 1)


def test_list_values(sample_text):
    tags = pycni.loads(sample_text).get_list('server', 'tags')
    assert [i.text for i in tags] == ['web', 'a, b', 'x\ty', '[1, 2]']
    assert [i.style for i in tags] == [
        ValueStyle.BARE, ValueStyle.RAW, ValueStyle.QUOTED, ValueStyle.LIST]
    assert [i.as_integer() for i in tags[3].as_list()] == [1, 2]


def test_empty_and_comment_only():
    assert pycni.loads('') == pycni.Document()
    assert pycni.loads('# nothing\n\n   \n') == pycni.Document()


def test_empty_section_is_kept():
    doc = pycni.loads('[a]\n[b]\nk = v\n')
    assert list(doc) == ['', 'a', 'b']
    assert len(doc['a']) == 0


def test_first_error_wins():
    with pytest.raises(StructuralError) as info:
        pycni.loads('a = 1\na = 2\n[s]\n[s]\n')
    assert info.value.kind is ErrorKind.DUPLICATE_KEY


def test_failed_parse_keeps_earlier_entries():
    parser = CniParser('a = 1\nb\n')
    with pytest.raises(StructuralError):
        parser.parse()
    assert list(parser.document.header) == ['a']


# ==========================================
# 3. Extensions
# ==========================================

def test_tabulation_value():
    text = 'motd = Hello\n\tand welcome\n\n[s]\nk = v\n'
    doc = pycni.loads(text, CniOpts(tabulation=True))
    assert doc.get_string('', 'motd') == 'Hello\nand welcome'
    assert doc.header.entry('motd').pos == (1, 1)
    assert doc.get_string('s', 'k') == 'v'


def test_tabulation_off_reads_indented_key():
    doc = pycni.loads('a = 1\n\tb = 2\n')
    assert doc.flatten() == {'a': '1', 'b': '2'}


def test_ini_reopen_is_logged(caplog):
    with caplog.at_level(logging.DEBUG):
        doc = pycni.loads('[s]\na = 1\n[t]\n[s]\nb = 2\n', CniOpts(ini=True))
    assert list(doc) == ['', 's', 't']
    assert list(doc['s']) == ['a', 'b']
    assert 'reopening [s]' in caplog.text


def test_options_combine():
    text = '; legacy\n[ sec ]\nkey@1 = one\n\ttwo\n'
    doc = pycni.loads(text, pycni.ALL)
    assert doc.get_string('sec', 'key@1') == 'one\ntwo'
    for name in ('ini', 'tabulation', 'flexspace', 'more-keys'):
        with pytest.raises(pycni.CniError):
            pycni.loads(text, CniOpts.from_names(
                *(i for i in pycni.ALL.names if i != name)))


# ==========================================
# 4. Entry points
# ==========================================

def test_load_from_stream():
    doc = pycni.load(StringIO('[s]\nk = v\n'))
    assert doc.get_string('s', 'k') == 'v'


def test_iter_pairs_is_lazy():
    pairs = pycni.iter_pairs('a = 1\n[s]\nb = 2\n[s]\n')
    assert next(pairs) == ('a', '1')
    assert next(pairs) == ('s.b', '2')
    # the duplicate header only shows up once it is reached.
    with pytest.raises(StructuralError):
        next(pairs)


def test_entries_yield_sections():
    parser = CniParser('a = 1\n[s]\nb = 2\n')
    got = [(s.name, e.key) for s, e in parser.entries()]
    assert got == [('', 'a'), ('s', 'b')]
    assert parser.document.flatten() == {'a': '1', 's.b': '2'}


def test_backslash_at_line_end_is_unterminated():
    with pytest.raises(pycni.LexicalError) as info:
        pycni.loads('k = "a\\\n')
    assert info.value.kind is ErrorKind.UNTERMINATED_QUOTE
    assert info.value.pos == (1, 5)
    assert '\n' not in str(info.value)
