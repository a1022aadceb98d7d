import pytest

from relaxed_format.api import join, surround
from relaxed_format.doc import (
    Break,
    BreakMode,
    Cons,
    Force,
    Group,
    GroupMode,
    Nest,
    NestIndent,
    NestMode,
    Tagged,
    Text,
    NIL,
    LINE,
)
from relaxed_format.relax import relax_space
from relaxed_format.render import render_to_str

SPACE = Break(' ', BreakMode.FLEX)
STRICT_SPACE = Break(' ', BreakMode.STRICT)
STRICT_EMPTY = Break('', BreakMode.STRICT)

OPEN_CLOSE_PAIRS = [('(', ')'), ('{', '}'), ('[', ']'), ('<<', '>>')]


@pytest.mark.parametrize('value', [
    Text('x'),
    Text('('),
    Text(')'),
    NIL,
    LINE,
    'plain str',
    42,
    None,
])
def test_leaves_are_unchanged(value):
    assert relax_space(value) is value


@pytest.mark.parametrize('close', ['}', ')', ']', '>>'])
def test_strict_empty_break_before_close_becomes_space(close):
    doc = Cons(STRICT_EMPTY, Text(close))
    assert relax_space(doc) == Cons(STRICT_SPACE, Text(close))


@pytest.mark.parametrize('left', [
    Text('x'),
    Break('', BreakMode.FLEX),
    Break(' ', BreakMode.STRICT),
    NIL,
])
def test_space_inserted_before_close(left):
    doc = Cons(left, Text(')'))
    assert relax_space(doc) == Cons(left, Cons(SPACE, Text(')')))


def test_content_before_close_is_relaxed():
    doc = Cons(Cons(Text('['), Text('x')), Text(']'))
    assert relax_space(doc) == Cons(
        Cons(Text('['), Cons(SPACE, Text('x'))),
        Cons(SPACE, Text(']')),
    )


@pytest.mark.parametrize('open_', ['{', '(', '[', '<<'])
def test_space_inserted_after_open(open_):
    doc = Cons(Text(open_), Text('x'))
    assert relax_space(doc) == Cons(Text(open_), Cons(SPACE, Text('x')))


def test_space_inserted_after_open_in_tagged_node():
    doc = Tagged('color', Text('('), Cons(Text('x'), Text(')')))
    assert relax_space(doc) == Tagged(
        'color',
        Text('('),
        Cons(SPACE, Cons(Text('x'), Cons(SPACE, Text(')')))),
    )


def test_close_takes_precedence_over_open():
    doc = Cons(Text('('), Text(')'))
    assert relax_space(doc) == Cons(Text('('), Cons(SPACE, Text(')')))


def test_generic_cons_is_relaxed_on_both_sides():
    doc = Cons(Cons(Text('a'), Text(')')), Cons(Text('('), Text('b')))
    assert relax_space(doc) == Cons(
        Cons(Text('a'), Cons(SPACE, Text(')'))),
        Cons(Text('('), Cons(SPACE, Text('b'))),
    )


def test_wrappers_keep_their_parameters():
    inner = Cons(Text('x'), Text(']'))
    relaxed_inner = Cons(Text('x'), Cons(SPACE, Text(']')))

    assert relax_space(Nest(inner, 4, NestMode.BREAK)) == Nest(
        relaxed_inner, 4, NestMode.BREAK
    )
    assert relax_space(Nest(inner, NestIndent.CURSOR)) == Nest(
        relaxed_inner, NestIndent.CURSOR
    )
    assert relax_space(Group(inner, GroupMode.INHERIT)) == Group(
        relaxed_inner, GroupMode.INHERIT
    )
    assert relax_space(Force(inner)) == Force(relaxed_inner)


def test_other_two_item_tagged_nodes_are_relaxed():
    doc = Tagged('color', Cons(Text('x'), Text('}')), 'red')
    assert relax_space(doc) == Tagged(
        'color',
        Cons(Text('x'), Cons(SPACE, Text('}'))),
        'red',
    )


def test_other_composites_are_unchanged():
    three = Tagged('fits', Cons(Text('x'), Text(')')), 1, 2)
    one = Tagged('collapse', Cons(Text('x'), Text(')')))
    brk = Break('(', BreakMode.STRICT)

    assert relax_space(three) is three
    assert relax_space(one) is one
    assert relax_space(brk) is brk


def test_input_is_not_mutated():
    doc = Group(Cons(Text('('), Cons(Text('x'), Text(')'))))
    before = repr(doc)
    relax_space(doc)
    assert repr(doc) == before


def test_deterministic():
    doc = surround('{', join(['1', '2']), '}')
    assert relax_space(doc) == relax_space(doc)


def test_deep_documents():
    doc = Text(')')
    for _ in range(20000):
        doc = Cons(Text('a'), doc)
    assert render_to_str(relax_space(doc), None) == 'a' * 20000 + ' )'

    doc = Text('x')
    for _ in range(20000):
        doc = Group(doc)
    assert relax_space(doc) == doc


@pytest.mark.parametrize('open_, close', OPEN_CLOSE_PAIRS)
def test_rendered_container(open_, close):
    doc = surround(open_, join(['1', '2']), close)
    assert render_to_str(doc, 80) == f'{open_}1, 2{close}'
    assert render_to_str(relax_space(doc), 80) == f'{open_} 1, 2 {close}'


@pytest.mark.parametrize('open_, close', OPEN_CLOSE_PAIRS)
def test_rendered_empty_container(open_, close):
    doc = Cons(Text('foo'), Cons(Text(open_), Text(close)))
    assert render_to_str(relax_space(doc), 80) == f'foo{open_} {close}'


def test_rendered_broken_container():
    doc = surround('[', join(['1', '2']), ']')
    assert render_to_str(relax_space(doc), 4) == '[ \n  1,\n  2\n]'


def test_second_pass_adds_another_space():
    doc = Cons(Text('x'), Text(')'))
    twice = relax_space(relax_space(doc))
    assert twice == Cons(Text('x'), Cons(SPACE, Cons(SPACE, Text(')'))))
    assert render_to_str(twice, None) == 'x  )'
