import re
from enum import IntEnum, auto

from .errors import FormatSyntaxError, UnsupportedSyntaxError


class TokenKind(IntEnum):
    INT = auto()
    FLOAT = auto()
    CHAR = auto()
    ATOM = auto()
    STRING = auto()
    CHARLIST = auto()

    IDENTIFIER = auto()
    ALIAS = auto()
    KEYWORD = auto()
    ATTRIBUTE = auto()
    CAPTURE_ARG = auto()

    OPERATOR = auto()

    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBINARY = auto()
    RBINARY = auto()

    PERCENT = auto()
    COMMA = auto()
    DOT = auto()
    SEMICOLON = auto()

    NEWLINE = auto()
    COMMENT = auto()
    EOF = auto()


class Token:
    __slots__ = ('kind', 'value', 'line', 'column', 'space_before')

    def __init__(self, kind, value, line, column, space_before=False):
        self.kind = kind
        self.value = value
        self.line = line
        self.column = column
        self.space_before = space_before

    def __repr__(self):
        return f'Token({self.kind.name}, {repr(self.value)}, {self.line}:{self.column})'


WORD_OPERATORS = frozenset(['and', 'or', 'not', 'in', 'when'])

# Words that open or close constructs the formatter does not handle.
UNSUPPORTED_WORDS = frozenset([
    'do', 'end', 'fn', 'else', 'after', 'catch', 'rescue',
])

OPERATORS = (
    '===', '!==', '\\\\', '|>', '<>', '<=', '>=', '==', '!=', '=~', '&&',
    '||', '++', '--', '..', '=>', '<-', '**', '::', '=', '<', '>', '+', '-',
    '*', '/', '|', '!', '^', '&',
)

PUNCTUATION = {
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '[': TokenKind.LBRACKET,
    ']': TokenKind.RBRACKET,
    '{': TokenKind.LBRACE,
    '}': TokenKind.RBRACE,
    '%': TokenKind.PERCENT,
    ',': TokenKind.COMMA,
    '.': TokenKind.DOT,
    ';': TokenKind.SEMICOLON,
}

WHITESPACE_PATTERN = re.compile(r'[ \t]+')
NEWLINES_PATTERN = re.compile(r'(?:[ \t]*\r?\n)+')
NUMBER_PATTERN = re.compile(
    r'0x[0-9a-fA-F_]+|0b[01_]+|0o[0-7_]+'
    r'|(?P<float>\d[\d_]*\.\d[\d_]*(?:[eE][+-]?\d+)?)'
    r'|\d[\d_]*'
)
CHAR_PATTERN = re.compile(r'\?(?:\\.|[^\s\\])')
IDENTIFIER_PATTERN = re.compile(r'[a-z_][A-Za-z0-9_]*[?!]?')
ALIAS_PATTERN = re.compile(r'[A-Z][A-Za-z0-9_]*')
ATTRIBUTE_PATTERN = re.compile(r'@[a-z_][A-Za-z0-9_]*[?!]?')
CAPTURE_ARG_PATTERN = re.compile(r'&\d+')
ATOM_PATTERN = re.compile(
    r':(?:[A-Za-z_][A-Za-z0-9_]*[?!]?'
    r'|<<>>|===|!==|==|!=|<=|>=|&&|\|\||<>|\+\+|--|\|>|\.\.'
    r'|[+\-*/<>=!^&|])'
)
OPERATOR_PATTERN = re.compile(
    '|'.join(re.escape(op) for op in sorted(OPERATORS, key=len, reverse=True))
)


class _Tokenizer:
    def __init__(self, source, file, line):
        self.source = source
        self.file = file
        self.first_line = line
        self.pos = 0
        self.line = line
        self.line_start = 0
        self.tokens = []
        self.space_before = False

    @property
    def column(self):
        return self.pos - self.line_start + 1

    def source_line(self):
        end = self.source.find('\n', self.line_start)
        if end == -1:
            end = len(self.source)
        return self.source[self.line_start:end]

    def error(self, msg, cls=FormatSyntaxError):
        return cls(msg, self.file, self.line, self.column, self.source_line())

    def emit(self, kind, value):
        self.tokens.append(
            Token(kind, value, self.line, self.column, self.space_before)
        )
        self.pos += len(value)
        self.space_before = False

    def scan_quoted(self, start):
        """Returns the index just past the quoted literal starting at
        ``start``. Interpolations may nest further quoted literals."""
        source = self.source
        quote = source[start]
        pos = start + 1
        while pos < len(source):
            char = source[pos]
            if char == '\\':
                pos += 2
            elif char == quote:
                return pos + 1
            elif char == '\n':
                raise self.error(
                    'multi-line strings are not supported',
                    UnsupportedSyntaxError,
                )
            elif source.startswith('#{', pos):
                pos = self.scan_interpolation(pos + 2)
            else:
                pos += 1
        raise self.error(f'missing terminator: {quote}')

    def scan_interpolation(self, pos):
        source = self.source
        depth = 1
        while pos < len(source):
            char = source[pos]
            if char in '"\'':
                pos = self.scan_quoted(pos)
                continue
            if char == '{':
                depth += 1
            elif char == '}':
                depth -= 1
                if depth == 0:
                    return pos + 1
            pos += 1
        raise self.error('missing interpolation terminator: }')

    def run(self):
        source = self.source
        while self.pos < len(source):
            pos = self.pos
            char = source[pos]

            match = NEWLINES_PATTERN.match(source, pos)
            if match:
                value = match.group()
                self.emit(TokenKind.NEWLINE, value)
                self.line += value.count('\n')
                self.line_start = match.end()
                continue

            match = WHITESPACE_PATTERN.match(source, pos)
            if match:
                self.pos = match.end()
                self.space_before = True
                continue

            if char == '#':
                end = source.find('\n', pos)
                if end == -1:
                    end = len(source)
                self.emit(TokenKind.COMMENT, source[pos:end].rstrip())
                self.pos = end
                continue

            if source.startswith('"""', pos) or source.startswith("'''", pos):
                raise self.error('heredocs are not supported', UnsupportedSyntaxError)

            if char in '"\'':
                end = self.scan_quoted(pos)
                if self.at_keyword_colon(end):
                    self.emit(TokenKind.KEYWORD, source[pos:end + 1])
                    continue
                kind = TokenKind.STRING if char == '"' else TokenKind.CHARLIST
                self.emit(kind, source[pos:end])
                continue

            if char == '~':
                raise self.error('sigils are not supported', UnsupportedSyntaxError)

            match = NUMBER_PATTERN.match(source, pos)
            if match:
                kind = TokenKind.FLOAT if match.group('float') else TokenKind.INT
                self.emit(kind, match.group())
                continue

            match = CHAR_PATTERN.match(source, pos)
            if match:
                self.emit(TokenKind.CHAR, match.group())
                continue

            if source.startswith('::', pos):
                self.emit(TokenKind.OPERATOR, '::')
                continue

            if char == ':':
                if source.startswith(':"', pos):
                    self.emit(TokenKind.ATOM, source[pos:self.scan_quoted(pos + 1)])
                    continue
                match = ATOM_PATTERN.match(source, pos)
                if not match:
                    raise self.error(f'unexpected token: {char}')
                self.emit(TokenKind.ATOM, match.group())
                continue

            match = IDENTIFIER_PATTERN.match(source, pos)
            if match:
                self.identifier(match)
                continue

            match = ALIAS_PATTERN.match(source, pos)
            if match:
                self.emit(TokenKind.ALIAS, match.group())
                continue

            match = ATTRIBUTE_PATTERN.match(source, pos)
            if match:
                self.emit(TokenKind.ATTRIBUTE, match.group())
                continue

            match = CAPTURE_ARG_PATTERN.match(source, pos)
            if match:
                self.emit(TokenKind.CAPTURE_ARG, match.group())
                continue

            if source.startswith('<<', pos):
                self.emit(TokenKind.LBINARY, '<<')
                continue

            if source.startswith('>>', pos):
                self.emit(TokenKind.RBINARY, '>>')
                continue

            if source.startswith('->', pos):
                raise self.error('clauses are not supported', UnsupportedSyntaxError)

            match = OPERATOR_PATTERN.match(source, pos)
            if match:
                self.emit(TokenKind.OPERATOR, match.group())
                continue

            if char in PUNCTUATION:
                self.emit(PUNCTUATION[char], char)
                continue

            raise self.error(f'unexpected token: {char}')

        self.tokens.append(
            Token(TokenKind.EOF, '', self.line, self.column, self.space_before)
        )
        return self.tokens

    def at_keyword_colon(self, end):
        """True if a keyword key such as ``a:`` or ``"a b":`` ends at
        ``end``."""
        source = self.source
        return (
            source.startswith(':', end) and
            not source.startswith('::', end) and
            (end + 1 == len(source) or source[end + 1] in ' \t\r\n')
        )

    def identifier(self, match):
        word = match.group()
        end = match.end()
        if self.at_keyword_colon(end):
            self.emit(TokenKind.KEYWORD, word + ':')
        elif word in WORD_OPERATORS:
            self.emit(TokenKind.OPERATOR, word)
        elif word in UNSUPPORTED_WORDS:
            raise self.error(
                f'"{word}" blocks are not supported',
                UnsupportedSyntaxError,
            )
        else:
            self.emit(TokenKind.IDENTIFIER, word)


def tokenize(source, file='nofile', line=1):
    """Splits ``source`` into a list of tokens ending with an ``EOF``
    token. Line numbers start at ``line``."""
    return _Tokenizer(source, file, line).run()
