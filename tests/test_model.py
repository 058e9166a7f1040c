"""
Document model: values, sections and documents built by hand.
"""
import pytest

import pycni
from pycni import (
    Document, Entry, ErrorKind, MissingSectionError, Section, StructuralError,
    Value, ValueStyle
)


def test_value_of_python_objects():
    assert Value.of(True).text == 'true'
    assert Value.of(42).text == '42'
    assert Value.of(0.5).text == '0.5'
    assert Value.of(None).text == ''
    assert Value.of('x').style is ValueStyle.BARE
    v = Value.of(['a', 1, [False]])
    assert v.text == '[a, 1, [false]]'
    assert [i.text for i in v.items] == ['a', '1', '[false]']
    with pytest.raises(ValueError):
        Value.of(float('nan'))


def test_value_equality_ignores_style():
    assert Value('x', style=ValueStyle.RAW) == Value('x')
    assert Value('[x]') != Value.of(['x'])
    with pytest.raises(ValueError):
        Value('[]', style=ValueStyle.LIST)
    assert Value('[]', ()).style is ValueStyle.LIST


def test_entry_equality_ignores_position():
    assert Entry('k', Value('v'), line=3, col=1) == Entry('k', Value('v'))


def test_section_mapping():
    s = Section('s')
    s['a'] = 1
    s['b'] = 'two'
    assert list(s.items()) == [('a', Value('1')), ('b', Value('two'))]
    assert s.get_integer('a') == 1
    del s['a']
    assert 'a' not in s
    assert repr(s) == '[s] { .cnt = 1 }'
    assert str(s) == '[s]'


def test_overwrite_warns():
    s = Section('s')
    s['a'] = 1
    with pytest.warns(UserWarning, match='already has "a"'):
        s['a'] = 2
    assert s['a'].text == '2'


def test_replace_keeps_order_and_position():
    doc = pycni.loads('[s]\na = 1\nb = 2\n')
    doc['s'].replace('a', 10)
    assert list(doc['s']) == ['a', 'b']
    assert doc['s'].entry('a').pos == (2, 1)
    assert doc.get_integer('s', 'a') == 10


def test_section_equality_is_ordered():
    one = Section('s', [Entry('a', Value('1')), Entry('b', Value('2'))])
    two = Section('s', [Entry('b', Value('2')), Entry('a', Value('1'))])
    assert one != two
    assert one == Section('s', [Entry('a', Value('1')), Entry('b', Value('2'))])
    assert one != Section('t', one.entries())


def test_nameless_section_always_there():
    doc = Document()
    assert list(doc) == ['']
    doc.header['k'] = 'v'
    del doc['']
    assert list(doc) == ['']
    assert len(doc.header) == 0


def test_document_setitem():
    doc = Document()
    doc['app'] = {'name': 'demo', 'workers': 4}
    doc['copy'] = doc['app']
    assert doc['copy'].name == 'copy'
    assert doc.flatten() == {
        'app.name': 'demo', 'app.workers': '4',
        'copy.name': 'demo', 'copy.workers': '4'}
    assert repr(doc) == '<CNI Document: 2 sections, 4 entries>'
    del doc['copy']
    with pytest.raises(MissingSectionError):
        doc.section('copy')


def test_add_section_returns_existing():
    doc = Document()
    first = doc.add_section('s')
    assert doc.add_section('s') is first
    assert doc.add_section('') is doc.header


def test_walk_and_pairs(sample_text):
    doc = pycni.loads(sample_text)
    keys = [(s.name, e.key) for s, e in doc.walk()]
    assert keys[:3] == [('', 'title'), ('server', 'host'), ('server', 'port')]
    pairs = dict(doc.pairs())
    assert pairs['server.tls.enabled'] == Value('true')
    assert doc.flatten()['server.motd'] == 'multi\nline'


def test_from_flat():
    doc = Document.from_flat({
        'top': 1,
        'a.b.c': 'd',
        'a': {'x': True},
        'srv': {'tls': {'on': False}},
    })
    assert list(doc) == ['', 'a', 'srv']
    assert doc.get_integer('', 'top') == 1
    assert doc.get_string('a', 'b.c') == 'd'
    assert doc.get_boolean('a', 'x') is True
    assert doc.get_boolean('srv', 'tls.on') is False


def test_document_equality():
    text = 'a = 1\n[s]\nk = `v`\n'
    assert pycni.loads(text) == pycni.loads(text.replace('`v`', 'v'))
    assert pycni.loads(text) != pycni.loads('a = 2\n[s]\nk = v\n')


def test_flatten_refuses_colliding_keys():
    doc = pycni.loads('a.b = 1\n[a]\nb = 2\n')
    assert list(doc.pairs()) == [('a.b', Value('1')), ('a.b', Value('2'))]
    with pytest.raises(StructuralError) as info:
        doc.flatten()
    assert info.value.kind is ErrorKind.DUPLICATE_KEY
    assert info.value.pos == (3, 1)
    assert info.value.original == (1, 1)
    assert "'a.b' is both in [] and [a]" in str(info.value)
