import pytest

from relaxed_format.errors import FormatSyntaxError, UnsupportedSyntaxError
from relaxed_format.parser import (
    Access,
    AnonymousCall,
    BinaryOp,
    Block,
    Call,
    Comment,
    Container,
    Dot,
    Keyword,
    KeywordList,
    Literal,
    Statement,
    UnaryOp,
    parse,
)
from relaxed_format.syntax import TokenKind, tokenize


def expr(source):
    block = parse(source)
    assert len(block.statements) == 1
    return block.statements[0].node


def kinds(source):
    return [token.kind for token in tokenize(source)]


def test_tokenize_brackets():
    assert kinds('<<1>>') == [
        TokenKind.LBINARY,
        TokenKind.INT,
        TokenKind.RBINARY,
        TokenKind.EOF,
    ]


def test_tokenize_keyword_and_atom():
    tokens = tokenize('[a: :b, c::d]')
    assert [(t.kind, t.value) for t in tokens[:5]] == [
        (TokenKind.LBRACKET, '['),
        (TokenKind.KEYWORD, 'a:'),
        (TokenKind.ATOM, ':b'),
        (TokenKind.COMMA, ','),
        (TokenKind.IDENTIFIER, 'c'),
    ]
    assert tokens[5].value == '::'


def test_tokenize_strings_with_interpolation():
    tokens = tokenize('"a #{"}"} b" \'c\'')
    assert tokens[0].kind is TokenKind.STRING
    assert tokens[0].value == '"a #{"}"} b"'
    assert tokens[1].kind is TokenKind.CHARLIST


def test_tokenize_numbers():
    tokens = tokenize('1_000 1.5e3 0xFF 1..2')
    assert [(t.kind, t.value) for t in tokens[:-1]] == [
        (TokenKind.INT, '1_000'),
        (TokenKind.FLOAT, '1.5e3'),
        (TokenKind.INT, '0xFF'),
        (TokenKind.INT, '1'),
        (TokenKind.OPERATOR, '..'),
        (TokenKind.INT, '2'),
    ]


def test_tokenize_positions():
    tokens = tokenize('a\n  b', line=5)
    assert (tokens[0].line, tokens[0].column) == (5, 1)
    assert (tokens[2].line, tokens[2].column) == (6, 3)
    assert tokens[2].space_before


def test_literals():
    assert expr(':ok') == Literal(':ok')
    assert expr('"hi"') == Literal('"hi"')
    assert expr('Foo.Bar') == Literal('Foo.Bar')


def test_call_with_parens():
    assert expr('foo(1, a: 2)') == Call(
        'foo',
        [Literal('1'), Keyword('a:', Literal('2'))],
    )


def test_remote_call():
    assert expr('Enum.map(xs, f)') == Call(
        'map',
        [Literal('xs'), Literal('f')],
        module=Literal('Enum'),
    )


def test_call_without_parens():
    assert expr('foo 1, 2') == Call(
        'foo',
        [Literal('1'), Literal('2')],
        parens=False,
    )
    assert expr('IO.puts "hi"') == Call(
        'puts',
        [Literal('"hi"')],
        parens=False,
        module=Literal('IO'),
    )


def test_call_without_parens_negative_argument():
    assert expr('foo -1') == Call('foo', [UnaryOp('-', Literal('1'))], parens=False)
    assert expr('foo - 1') == BinaryOp('-', Literal('foo'), Literal('1'))


def test_containers():
    assert expr('{}') == Container('tuple', [])
    assert expr('[1, 2,]') == Container('list', [Literal('1'), Literal('2')])
    assert expr('%{a: 1}') == Container(
        'map', [Keyword('a:', Literal('1'))], '%'
    )
    assert expr('%Foo.Bar{}') == Container('map', [], '%Foo.Bar')
    assert expr('<<x::8>>') == Container(
        'bitstring', [BinaryOp('::', Literal('x'), Literal('8'))]
    )


def test_map_update():
    assert expr('%{m | a: 1, b: 2}') == Container(
        'map',
        [BinaryOp(
            '|',
            Literal('m'),
            KeywordList([
                Keyword('a:', Literal('1')),
                Keyword('b:', Literal('2')),
            ]),
        )],
        '%',
    )


def test_precedence():
    assert expr('1 + 2 * 3') == BinaryOp(
        '+',
        Literal('1'),
        BinaryOp('*', Literal('2'), Literal('3')),
    )
    assert expr('a ++ b ++ c') == BinaryOp(
        '++',
        Literal('a'),
        BinaryOp('++', Literal('b'), Literal('c')),
    )
    assert expr('a - b - c') == BinaryOp(
        '-',
        BinaryOp('-', Literal('a'), Literal('b')),
        Literal('c'),
    )


def test_postfix():
    assert expr('map[:a].b') == Dot(Access(Literal('map'), Literal(':a')), 'b')
    assert expr('f.(1)') == AnonymousCall(Literal('f'), [Literal('1')])


def test_capture():
    assert expr('&foo/1') == UnaryOp(
        '&',
        BinaryOp('/', Literal('foo'), Literal('1')),
    )


def test_newlines_inside_brackets():
    assert expr('[\n  1,\n  2\n]') == Container('list', [Literal('1'), Literal('2')])


def test_pipeline_continues_on_next_line():
    assert expr('a\n|> b()') == BinaryOp('|>', Literal('a'), Call('b', []))


def test_statements_and_comments():
    assert parse('a\n\n\n# c\nb # t\n') == Block([
        Statement(Literal('a')),
        Statement(Comment('# c'), blank_before=True),
        Statement(Literal('b'), comment='# t'),
    ])


def test_semicolons_separate_statements():
    assert len(parse('a; b').statements) == 2


@pytest.mark.parametrize('source, line', [
    ('foo(1, ', 1),
    ('foo(1))', 1),
    ('a\nb c d e)', 2),
    ('"abc', 1),
    ('$', 1),
])
def test_syntax_errors(source, line):
    with pytest.raises(FormatSyntaxError) as excinfo:
        parse(source, file='lib/a.ex')
    assert excinfo.value.filename == 'lib/a.ex'
    assert excinfo.value.lineno == line


def test_error_line_offset():
    with pytest.raises(FormatSyntaxError) as excinfo:
        parse('ok\nfoo(', line=10)
    assert excinfo.value.lineno == 11
    assert excinfo.value.text == 'foo('


@pytest.mark.parametrize('source', [
    'if x do\n  1\nend',
    'fn x -> x end',
    '~r/abc/',
    '"""\nheredoc\n"""',
    '[1, # one\n 2]',
    '"a\nb"',
])
def test_unsupported_syntax(source):
    with pytest.raises(UnsupportedSyntaxError):
        parse(source)


def test_quoted_keyword_key():
    tokens = tokenize('["a b": 1, "c"::d]')
    assert (tokens[1].kind, tokens[1].value) == (TokenKind.KEYWORD, '"a b":')
    assert tokens[4].kind is TokenKind.STRING
    assert expr('["a b": 1]') == Container(
        'list', [Keyword('"a b":', Literal('1'))]
    )


def test_attribute_call_with_parens():
    assert expr('@attr(1)') == Call('@attr', [Literal('1')])
