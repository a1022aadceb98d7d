"""Relaxes the spacing around brackets in a document tree.

``relax_space`` inserts a space on the inner side of ``(``, ``{``, ``[``
and ``<<`` and before the matching ``)``, ``}``, ``]`` and ``>>``::

    foo(1, 2)      ->  foo( 1, 2 )
    {:a, :b}       ->  { :a, :b }

It operates on the document produced by the formatter, before layout,
so the inserted spaces are breaks that the layout algorithm may still
turn into newlines.

The rewrite is a single pass: applying it to its own output inserts
a second layer of spacing before closing brackets.
"""
from .brackets import is_close_doc, is_open_doc
from .doc import (
    Break,
    BreakMode,
    Cons,
    Doc,
    Force,
    Group,
    Nest,
    Tagged,
)

_EMPTY_STRICT_BREAK = Break('', BreakMode.STRICT)


class _Rebuild:
    __slots__ = ('fn', 'arity')

    def __init__(self, fn, arity):
        self.fn = fn
        self.arity = arity


def _is_pair(doc):
    return isinstance(doc, Cons) or (
        isinstance(doc, Tagged) and len(doc.items) == 2
    )


def _pair_items(doc):
    if isinstance(doc, Cons):
        return doc.left, doc.right
    return doc.items


def _make_pair(doc, first, second):
    if isinstance(doc, Cons):
        return Cons(first, second)
    return Tagged(doc.tag, first, second)


def _rewrite(doc):
    """Matches ``doc`` against the rewrite cases in order.

    Returns ``None`` when ``doc`` is passed through unchanged, otherwise
    a pair of the children still to be relaxed and a function that
    builds the rewritten node from the relaxed children.
    """
    if not isinstance(doc, Doc):
        return None

    if isinstance(doc, Cons) and is_close_doc(doc.right):
        close = doc.right
        if doc.left == _EMPTY_STRICT_BREAK:
            return (), lambda: Cons(Break(' ', BreakMode.STRICT), close)
        return (doc.left, ), lambda left: Cons(
            left,
            Cons(Break(' ', BreakMode.FLEX), close),
        )

    if _is_pair(doc):
        first, second = _pair_items(doc)
        if is_open_doc(first):
            return (second, ), lambda rest: _make_pair(
                doc,
                first,
                Cons(Break(' ', BreakMode.FLEX), rest),
            )

    if isinstance(doc, Cons):
        return (doc.left, doc.right), Cons
    elif isinstance(doc, Nest):
        return (doc.doc, ), lambda inner: Nest(inner, doc.indent, doc.mode)
    elif isinstance(doc, Group):
        return (doc.doc, ), lambda inner: Group(inner, doc.mode)
    elif isinstance(doc, Force):
        return (doc.doc, ), Force
    elif isinstance(doc, Tagged) and len(doc.items) == 2:
        return doc.items, lambda a, b: Tagged(doc.tag, a, b)

    return None


def relax_space(doc):
    """Returns a new document with spaces inside bracket pairs.

    Never raises: shapes that no rule recognizes are returned as they
    are. Runs on an explicit stack, so the depth of ``doc`` is not
    limited by the interpreter's recursion limit.
    """
    results = []
    todo = [doc]

    while todo:
        item = todo.pop()

        if isinstance(item, _Rebuild):
            if item.arity:
                args = results[-item.arity:]
                del results[-item.arity:]
            else:
                args = []
            results.append(item.fn(*args))
            continue

        matched = _rewrite(item)
        if matched is None:
            results.append(item)
            continue

        children, rebuild = matched
        todo.append(_Rebuild(rebuild, len(children)))
        todo.extend(reversed(children))

    return results[0]
