"""Converts Elixir source into a document tree.

Each syntax node type has a function registered with
``register_format`` that builds its document from the documents of its
children. Containers are built with ``surround``, so that when a
container does not fit on a line its items go on their own lines:

    [
      1,
      2
    ]
"""
import logging
from collections.abc import Mapping
from functools import singledispatch

from .api import (
    break_,
    concat,
    group,
    join,
    nest,
    surround,
    text,
    NIL,
    LINE,
)
from .deprecations import parse_version, rename
from .doc import NestMode
from .parser import (
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
    UnaryOp,
    parse,
)

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 2

ANY_ARITY = '*'

DEFAULT_LOCALS_WITHOUT_PARENS = (
    ('alias', 1),
    ('alias', 2),
    ('import', 1),
    ('import', 2),
    ('require', 1),
    ('require', 2),
    ('use', 1),
    ('use', 2),
    ('defstruct', 1),
    ('defdelegate', 2),
    ('defexception', 1),
    ('defoverridable', 1),
    ('raise', 1),
    ('raise', 2),
    ('reraise', 2),
    ('reraise', 3),
    ('for', ANY_ARITY),
    ('with', ANY_ARITY),
)

CONTAINER_DELIMITERS = {
    'paren': ('(', ')'),
    'list': ('[', ']'),
    'tuple': ('{', '}'),
    'bitstring': ('<<', '>>'),
    'map': ('{', '}'),
}

# Written without surrounding spaces: 1..10, <<x::8>>
TIGHT_OPERATORS = frozenset(['..', '::'])

# Never broken after the operator.
UNBROKEN_OPERATORS = frozenset(['=', '=>', '|', 'when', '<-', '\\\\'])

# Bitstring modifiers such as binary-size(4) are written without spaces.
SEGMENT_TYPE_OPERATORS = frozenset(['-', '*'])

# &fun/1
CAPTURE_OPERATORS = frozenset(['/'])


def normalize_locals_without_parens(locals_without_parens):
    """Returns a set of ``(name, arity)`` pairs.

    Accepts an iterable of pairs, a mapping of ``name`` to arity, or a
    mapping of ``(name, arity)`` pairs to booleans. An arity is either a
    non-negative int or ``'*'`` for every arity.
    """
    if isinstance(locals_without_parens, Mapping):
        pairs = []
        for key, value in locals_without_parens.items():
            if isinstance(key, tuple):
                if value:
                    pairs.append(key)
            else:
                pairs.append((key, value))
    else:
        pairs = list(locals_without_parens)

    normalized = set()
    for pair in pairs:
        try:
            name, arity = pair
        except (TypeError, ValueError):
            raise ValueError(
                f'Expected a (name, arity) pair, got {repr(pair)}'
            ) from None
        if not isinstance(name, str):
            raise ValueError(f'Expected the name to be a str, got {repr(name)}')
        if arity != ANY_ARITY and not (
            isinstance(arity, int) and not isinstance(arity, bool) and arity >= 0
        ):
            raise ValueError(
                f"Expected the arity of {name} to be a non-negative int "
                f"or '*', got {repr(arity)}"
            )
        normalized.add((name, arity))
    return normalized


class FormatContext:
    __slots__ = (
        'indent',
        'locals_without_parens',
        'rename_deprecated_at',
        'tight_operators',
    )

    def __init__(
        self,
        indent=DEFAULT_INDENT,
        locals_without_parens=(),
        rename_deprecated_at=None,
        tight_operators=frozenset(),
    ):
        self.indent = indent
        self.locals_without_parens = frozenset(locals_without_parens)
        self.rename_deprecated_at = rename_deprecated_at
        self.tight_operators = tight_operators

    def _replace(self, **kwargs):
        passed_keys = set(kwargs.keys())
        fieldnames = type(self).__slots__
        assert passed_keys.issubset(set(fieldnames))
        return FormatContext(
            **{
                k: (
                    kwargs[k]
                    if k in passed_keys
                    else getattr(self, k)
                )
                for k in fieldnames
            }
        )

    def use_tight_operators(self, operators):
        return self._replace(tight_operators=frozenset(operators))

    def nested(self):
        """Context for the inside of brackets, where operators are spaced
        again."""
        if not self.tight_operators:
            return self
        return self.use_tight_operators(())

    def is_without_parens(self, name, arity):
        return (
            (name, arity) in self.locals_without_parens or
            (name, ANY_ARITY) in self.locals_without_parens
        )


def _format_unknown(node, ctx):
    raise TypeError(f'Cannot format {type(node).__name__}')


format_node = singledispatch(_format_unknown)


def register_format(_type):
    def decorator(fn):
        format_node.register(_type, fn)
        return fn
    return decorator


def container(ctx, left, docs, right):
    if not docs:
        return concat([left, right])
    return surround(left, join(docs), right, ctx.indent)


def call_args(ctx, callee, args):
    nested_ctx = ctx.nested()
    docs = [format_node(arg, nested_ctx) for arg in args]
    return concat([callee, container(ctx, '(', docs, ')')])


@register_format(Block)
def format_block(node, ctx):
    docs = []
    for statement in node.statements:
        if docs:
            docs.append(LINE)
            if statement.blank_before:
                docs.append(LINE)
        doc = format_node(statement.node, ctx)
        if statement.comment is not None:
            doc = concat([doc, ' ', text(statement.comment)])
        docs.append(doc)
    return concat(docs)


@register_format(Comment)
def format_comment(node, ctx):
    return text(node.text)


@register_format(Literal)
def format_literal(node, ctx):
    return text(node.text)


@register_format(Keyword)
def format_keyword(node, ctx):
    return concat([node.key, ' ', format_node(node.value, ctx)])


@register_format(KeywordList)
def format_keyword_list(node, ctx):
    return join(format_node(item, ctx) for item in node.items)


@register_format(Container)
def format_container(node, ctx):
    left, right = CONTAINER_DELIMITERS[node.kind]
    nested_ctx = ctx.nested()
    docs = [format_node(item, nested_ctx) for item in node.items]
    doc = container(ctx, left, docs, right)
    if node.prefix is not None:
        return concat([node.prefix, doc])
    return doc


def _renamed(node, ctx):
    if ctx.rename_deprecated_at is None:
        return node.name

    if node.module is None:
        module = 'Kernel'
    elif isinstance(node.module, Literal):
        module = node.module.text
    else:
        return node.name

    replacement = rename(module, node.name, len(node.args), ctx.rename_deprecated_at)
    return node.name if replacement is None else replacement


@register_format(Call)
def format_call(node, ctx):
    name = _renamed(node, ctx)

    if node.module is not None:
        callee = concat([format_node(node.module, ctx), '.', name])
    else:
        callee = text(name)

    if not node.parens and node.module is None and (
        name.startswith('@') or ctx.is_without_parens(name, len(node.args))
    ):
        docs = [format_node(arg, ctx) for arg in node.args]
        return group(
            concat([
                callee,
                ' ',
                nest(ctx.indent, join(docs), NestMode.BREAK),
            ])
        )

    return call_args(ctx, callee, node.args)


@register_format(Dot)
def format_dot(node, ctx):
    return concat([format_node(node.expr, ctx), '.', node.name])


@register_format(AnonymousCall)
def format_anonymous_call(node, ctx):
    return call_args(ctx, concat([format_node(node.expr, ctx), '.']), node.args)


@register_format(Access)
def format_access(node, ctx):
    return concat([
        format_node(node.expr, ctx),
        container(ctx, '[', [format_node(node.key, ctx.nested())], ']'),
    ])


@register_format(UnaryOp)
def format_unary(node, ctx):
    if node.op == 'not':
        return concat(['not ', format_node(node.operand, ctx)])
    if node.op == '&':
        ctx = ctx.use_tight_operators(CAPTURE_OPERATORS)
    return concat([node.op, format_node(node.operand, ctx)])


def _binary_chain(node, ctx):
    op = node.op

    # a |> b |> c shares one group, so all its pipes break together.
    if isinstance(node.left, BinaryOp) and node.left.op == op:
        left = _binary_chain(node.left, ctx)
    else:
        left = format_node(node.left, ctx)

    if op == '::':
        right = format_node(node.right, ctx.use_tight_operators(SEGMENT_TYPE_OPERATORS))
    else:
        right = format_node(node.right, ctx)

    if op in TIGHT_OPERATORS or op in ctx.tight_operators:
        return concat([left, op, right])
    elif op == '|>':
        return concat([left, break_(' '), '|> ', right])
    elif op in UNBROKEN_OPERATORS:
        return concat([left, f' {op} ', right])
    return concat([
        left,
        ' ' + op,
        nest(ctx.indent, concat([break_(' '), right]), NestMode.BREAK),
    ])


@register_format(BinaryOp)
def format_binary(node, ctx):
    return group(_binary_chain(node, ctx))


def to_doc(
    source,
    *,
    locals_without_parens=(),
    rename_deprecated_at=None,
    file='nofile',
    line=1
):
    """Parses ``source`` and returns its document tree.

    Calls written without parens keep them off only when their name and
    arity are in ``locals_without_parens`` (which augments
    ``DEFAULT_LOCALS_WITHOUT_PARENS``). With ``rename_deprecated_at``,
    calls deprecated at or before that version are renamed.
    """
    if rename_deprecated_at is not None:
        rename_deprecated_at = parse_version(rename_deprecated_at)

    ctx = FormatContext(
        locals_without_parens=(
            normalize_locals_without_parens(DEFAULT_LOCALS_WITHOUT_PARENS) |
            normalize_locals_without_parens(locals_without_parens)
        ),
        rename_deprecated_at=rename_deprecated_at,
    )

    tree = parse(source, file, line)
    logger.debug('Parsed %d statements from %s', len(tree.statements), file)

    if not tree.statements:
        return NIL
    return format_node(tree, ctx)
