"""Recursive descent parser for the subset of Elixir expressions that
the formatter lays out.

Binary operators are parsed by precedence climbing with the
precedences of the Elixir operator table. Newlines are insignificant
inside brackets and after operators and commas; at the top level they
separate statements, except before a line starting with a binary
operator such as ``|>``.
"""
from .errors import FormatSyntaxError, UnsupportedSyntaxError
from .syntax import TokenKind, tokenize


class Node:
    __slots__ = ()

    def __repr__(self):
        args = ', '.join(
            f'{name}={repr(getattr(self, name))}' for name in self.__slots__
        )
        return f'{type(self).__name__}({args})'

    def __eq__(self, other):
        return type(self) is type(other) and all(
            getattr(self, name) == getattr(other, name)
            for name in self.__slots__
        )

    __hash__ = None


class Literal(Node):
    """Numbers, atoms, strings, variables and aliases, kept as written."""
    __slots__ = ('text', )

    def __init__(self, text):
        self.text = text


class Keyword(Node):
    __slots__ = ('key', 'value')

    def __init__(self, key, value):
        self.key = key
        self.value = value


class KeywordList(Node):
    """A keyword list written without brackets, as in ``%{m | a: 1}``."""
    __slots__ = ('items', )

    def __init__(self, items):
        self.items = items


class Container(Node):
    __slots__ = ('kind', 'items', 'prefix')

    def __init__(self, kind, items, prefix=None):
        self.kind = kind
        self.items = items
        self.prefix = prefix


class Call(Node):
    __slots__ = ('name', 'args', 'parens', 'module')

    def __init__(self, name, args, parens=True, module=None):
        self.name = name
        self.args = args
        self.parens = parens
        self.module = module


class Dot(Node):
    __slots__ = ('expr', 'name')

    def __init__(self, expr, name):
        self.expr = expr
        self.name = name


class AnonymousCall(Node):
    __slots__ = ('expr', 'args')

    def __init__(self, expr, args):
        self.expr = expr
        self.args = args


class Access(Node):
    __slots__ = ('expr', 'key')

    def __init__(self, expr, key):
        self.expr = expr
        self.key = key


class UnaryOp(Node):
    __slots__ = ('op', 'operand')

    def __init__(self, op, operand):
        self.op = op
        self.operand = operand


class BinaryOp(Node):
    __slots__ = ('op', 'left', 'right')

    def __init__(self, op, left, right):
        self.op = op
        self.left = left
        self.right = right


class Comment(Node):
    __slots__ = ('text', )

    def __init__(self, text):
        self.text = text


class Statement(Node):
    __slots__ = ('node', 'comment', 'blank_before')

    def __init__(self, node, comment=None, blank_before=False):
        self.node = node
        self.comment = comment
        self.blank_before = blank_before


class Block(Node):
    __slots__ = ('statements', )

    def __init__(self, statements):
        self.statements = statements


# operator: (precedence, right associative)
BINARY_OPERATORS = {
    '<-': (1, False),
    '\\\\': (1, False),
    'when': (2, True),
    '::': (3, True),
    '|': (4, True),
    '=>': (5, True),
    '=': (7, True),
    '||': (8, False),
    'or': (8, False),
    '&&': (9, False),
    'and': (9, False),
    '==': (10, False),
    '!=': (10, False),
    '=~': (10, False),
    '===': (10, False),
    '!==': (10, False),
    '<': (11, False),
    '>': (11, False),
    '<=': (11, False),
    '>=': (11, False),
    '|>': (12, False),
    'in': (13, False),
    '++': (14, True),
    '--': (14, True),
    '..': (14, True),
    '<>': (14, True),
    '+': (15, False),
    '-': (15, False),
    '*': (16, False),
    '/': (16, False),
    '**': (17, False),
}

CAPTURE_PRECEDENCE = 6

UNARY_OPERATORS = frozenset(['-', '+', '!', '^', 'not'])

# Operators that may also start an expression; a line starting with
# one of them begins a new statement.
PREFIX_OPERATORS = UNARY_OPERATORS | {'&'}

LITERAL_KINDS = frozenset([
    TokenKind.INT,
    TokenKind.FLOAT,
    TokenKind.CHAR,
    TokenKind.ATOM,
    TokenKind.STRING,
    TokenKind.CHARLIST,
    TokenKind.CAPTURE_ARG,
])

EXPRESSION_START_KINDS = LITERAL_KINDS | {
    TokenKind.IDENTIFIER,
    TokenKind.ALIAS,
    TokenKind.KEYWORD,
    TokenKind.ATTRIBUTE,
    TokenKind.LPAREN,
    TokenKind.LBRACKET,
    TokenKind.LBRACE,
    TokenKind.LBINARY,
    TokenKind.PERCENT,
}

STATEMENT_END_KINDS = frozenset([
    TokenKind.NEWLINE,
    TokenKind.SEMICOLON,
    TokenKind.EOF,
])


class Parser:
    def __init__(self, tokens, source='', file='nofile', line=1):
        self.tokens = tokens
        self.pos = 0
        self.nesting = 0
        self.file = file
        self.first_line = line
        self.lines = source.split('\n')

    def error(self, msg, token=None, cls=FormatSyntaxError):
        if token is None:
            token = self.tokens[self.pos]
        idx = token.line - self.first_line
        source_line = self.lines[idx] if 0 <= idx < len(self.lines) else None
        return cls(msg, self.file, token.line, token.column, source_line)

    def peek(self):
        while True:
            token = self.tokens[self.pos]
            if self.nesting and token.kind is TokenKind.NEWLINE:
                self.pos += 1
            elif self.nesting and token.kind is TokenKind.COMMENT:
                raise self.error(
                    'comments inside expressions are not supported',
                    token,
                    UnsupportedSyntaxError,
                )
            else:
                return token

    def advance(self):
        token = self.peek()
        self.pos += 1
        return token

    def expect(self, kind):
        token = self.peek()
        if token.kind is not kind:
            raise self.error(f'unexpected token: {self.describe(token)}', token)
        self.pos += 1
        return token

    def describe(self, token):
        if token.kind is TokenKind.EOF:
            return 'end of file'
        if token.kind is TokenKind.NEWLINE:
            return 'end of line'
        return token.value

    def skip_newlines(self):
        while self.tokens[self.pos].kind is TokenKind.NEWLINE:
            self.pos += 1

    def adjacent(self):
        """True if the current token directly follows the previous one,
        with no whitespace or newline between."""
        token = self.peek()
        previous = self.tokens[self.pos - 1] if self.pos else None
        return not token.space_before and (
            previous is not None and previous.kind is not TokenKind.NEWLINE
        )

    def parse(self):
        statements = []
        blank = False

        while True:
            token = self.tokens[self.pos]
            if token.kind is TokenKind.EOF:
                break
            elif token.kind is TokenKind.NEWLINE:
                if statements and token.value.count('\n') > 1:
                    blank = True
                self.pos += 1
                continue
            elif token.kind is TokenKind.SEMICOLON:
                self.pos += 1
                continue
            elif token.kind is TokenKind.COMMENT:
                statements.append(Statement(Comment(token.value), blank_before=blank))
                blank = False
                self.pos += 1
                continue

            statement = Statement(self.parse_expression(), blank_before=blank)
            blank = False

            token = self.tokens[self.pos]
            if token.kind is TokenKind.COMMENT:
                statement.comment = token.value
                self.pos += 1
                token = self.tokens[self.pos]
            if token.kind not in STATEMENT_END_KINDS:
                raise self.error(f'unexpected token: {self.describe(token)}', token)

            statements.append(statement)

        return Block(statements)

    def peek_binary_operator(self):
        token = self.peek()
        if token.kind is TokenKind.OPERATOR and token.value in BINARY_OPERATORS:
            return token

        if token.kind is TokenKind.NEWLINE:
            following = self.tokens[self.pos + 1]
            if (
                following.kind is TokenKind.OPERATOR and
                following.value in BINARY_OPERATORS and
                following.value not in PREFIX_OPERATORS
            ):
                self.pos += 1
                return following

        return None

    def parse_expression(self, min_precedence=0):
        left = self.parse_unary()

        while True:
            token = self.peek_binary_operator()
            if token is None:
                break
            precedence, right_assoc = BINARY_OPERATORS[token.value]
            if precedence < min_precedence:
                break

            self.pos += 1
            self.skip_newlines()

            if token.value == '|' and self.peek().kind is TokenKind.KEYWORD:
                right = self.parse_keywords()
            else:
                right = self.parse_expression(
                    precedence if right_assoc else precedence + 1
                )
            left = BinaryOp(token.value, left, right)

        return left

    def parse_unary(self):
        token = self.peek()
        if token.kind is TokenKind.OPERATOR:
            if token.value in UNARY_OPERATORS:
                self.pos += 1
                return UnaryOp(token.value, self.parse_unary())
            elif token.value == '&':
                self.pos += 1
                return UnaryOp('&', self.parse_expression(CAPTURE_PRECEDENCE + 1))
            raise self.error(f'unexpected operator: {token.value}', token)
        return self.parse_postfix(self.parse_primary())

    def parse_primary(self):
        token = self.advance()
        kind = token.kind

        if kind in LITERAL_KINDS:
            return Literal(token.value)
        elif kind is TokenKind.IDENTIFIER or kind is TokenKind.ATTRIBUTE:
            if self.at_call_parens():
                return Call(token.value, self.parse_call_args())
            if self.starts_no_parens_args():
                return Call(token.value, self.parse_no_parens_args(), parens=False)
            return Literal(token.value)
        elif kind is TokenKind.ALIAS:
            return Literal(self.parse_alias_rest(token.value))
        elif kind is TokenKind.LPAREN:
            return Container('paren', self.parse_items(TokenKind.RPAREN))
        elif kind is TokenKind.LBRACKET:
            return Container('list', self.parse_items(TokenKind.RBRACKET))
        elif kind is TokenKind.LBRACE:
            return Container('tuple', self.parse_items(TokenKind.RBRACE))
        elif kind is TokenKind.LBINARY:
            return Container('bitstring', self.parse_items(TokenKind.RBINARY))
        elif kind is TokenKind.PERCENT:
            prefix = '%'
            if self.peek().kind is TokenKind.ALIAS:
                prefix += self.parse_alias_rest(self.advance().value)
            self.expect(TokenKind.LBRACE)
            return Container('map', self.parse_items(TokenKind.RBRACE), prefix)
        elif kind is TokenKind.COMMENT:
            raise self.error(
                'comments inside expressions are not supported',
                token,
                UnsupportedSyntaxError,
            )

        raise self.error(f'unexpected token: {self.describe(token)}', token)

    def parse_alias_rest(self, name):
        while (
            self.peek().kind is TokenKind.DOT and
            self.tokens[self.pos + 1].kind is TokenKind.ALIAS
        ):
            self.pos += 1
            name += '.' + self.advance().value
        return name

    def parse_postfix(self, node):
        while True:
            token = self.peek()
            if token.kind is TokenKind.DOT:
                self.pos += 1
                following = self.advance()
                if following.kind is TokenKind.LPAREN:
                    node = AnonymousCall(node, self.parse_items(TokenKind.RPAREN))
                elif following.kind is TokenKind.IDENTIFIER:
                    if self.at_call_parens():
                        node = Call(following.value, self.parse_call_args(), module=node)
                    elif self.starts_no_parens_args():
                        node = Call(
                            following.value,
                            self.parse_no_parens_args(),
                            parens=False,
                            module=node,
                        )
                    else:
                        node = Dot(node, following.value)
                else:
                    raise self.error(
                        f'unexpected token after ".": {self.describe(following)}',
                        following,
                    )
            elif token.kind is TokenKind.LBRACKET and self.adjacent():
                self.pos += 1
                self.nesting += 1
                key = self.parse_expression()
                self.expect(TokenKind.RBRACKET)
                self.nesting -= 1
                node = Access(node, key)
            else:
                return node

    def at_call_parens(self):
        return self.peek().kind is TokenKind.LPAREN and self.adjacent()

    def starts_no_parens_args(self):
        if self.nesting:
            return False
        token = self.tokens[self.pos]
        if not token.space_before:
            return False
        if token.kind in EXPRESSION_START_KINDS:
            return True
        if token.kind is TokenKind.OPERATOR and token.value in PREFIX_OPERATORS:
            following = self.tokens[self.pos + 1]
            return (
                following.kind in EXPRESSION_START_KINDS and
                not following.space_before
            )
        return False

    def parse_call_args(self):
        self.expect(TokenKind.LPAREN)
        return self.parse_items(TokenKind.RPAREN)

    def parse_no_parens_args(self):
        args = [self.parse_item()]
        while self.peek().kind is TokenKind.COMMA:
            self.pos += 1
            self.skip_newlines()
            args.append(self.parse_item())
        return args

    def parse_item(self):
        token = self.peek()
        if token.kind is TokenKind.KEYWORD:
            self.pos += 1
            self.skip_newlines()
            return Keyword(token.value, self.parse_expression())
        return self.parse_expression()

    def parse_keywords(self):
        items = [self.parse_item()]
        while (
            self.peek().kind is TokenKind.COMMA and
            self.tokens[self.pos + 1].kind is TokenKind.KEYWORD
        ):
            self.pos += 1
            items.append(self.parse_item())
        return KeywordList(items)

    def parse_items(self, close):
        """Parses comma separated items up to and including ``close``.
        The opening token has already been consumed."""
        self.nesting += 1
        items = []
        while self.peek().kind is not close:
            items.append(self.parse_item())
            if self.peek().kind is not TokenKind.COMMA:
                break
            self.pos += 1
        self.expect(close)
        self.nesting -= 1
        return items


def parse(source, file='nofile', line=1):
    """Parses ``source`` into a ``Block`` of statements."""
    return Parser(tokenize(source, file, line), source, file, line).parse()
