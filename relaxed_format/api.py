from functools import reduce

from .doc import (
    Break,
    BreakMode,
    Cons,
    Doc,
    Force,
    Group,
    GroupMode,
    Nest,
    NestMode,
    Text,
    NIL,
    LINE,
)


def text(x):
    if not isinstance(x, str):
        raise TypeError("Argument to text function must be a str")
    return Text(x)


def cast_doc(doc):
    """Casts value to doc, if possible."""
    if isinstance(doc, Doc):
        return doc
    elif isinstance(doc, str):
        if doc == "":
            return NIL
        return Text(doc)

    raise ValueError(doc)


def concat(docs):
    """Returns a concatenation of the documents in the iterable argument,
    as a right-nested chain of ``Cons`` nodes."""
    docs = [cast_doc(doc) for doc in docs]
    if not docs:
        return NIL
    return reduce(lambda right, left: Cons(left, right), reversed(docs))


def break_(separator=' '):
    """A strict break: rendered as ``separator`` when the enclosing group
    fits on the line, and as a newline otherwise."""
    return Break(separator, BreakMode.STRICT)


def flex_break(separator=' '):
    """A flex break: rendered as a newline only when the content up to the
    next break does not fit, even inside a broken group."""
    return Break(separator, BreakMode.FLEX)


def glue(left, right, separator=' '):
    """Concatenates ``left`` and ``right`` with a strict break between."""
    return Cons(cast_doc(left), Cons(break_(separator), cast_doc(right)))


def line(left, right):
    """Concatenates ``left`` and ``right`` with a mandatory newline."""
    return Cons(cast_doc(left), Cons(LINE, cast_doc(right)))


def nest(indent, doc, mode=NestMode.ALWAYS):
    return Nest(cast_doc(doc), indent, mode)


def group(doc, inherit=False):
    """Annotates doc with special meaning to the layout algorithm, so that the
    document is attempted to output on a single line if it is possible within
    the layout constraints. With ``inherit``, the group is broken whenever
    its parent is."""
    return Group(cast_doc(doc), GroupMode.INHERIT if inherit else GroupMode.SELF)


def force(doc):
    """Instructs the layout algorithm that ``doc`` must be
    broken to multiple lines. This instruction propagates
    to all higher levels in the layout, but nested groups
    may still be laid out flat."""
    return Force(cast_doc(doc))


def surround(left, doc, right, indent=2):
    """Wraps ``doc`` in ``left`` and ``right`` delimiters. When broken,
    ``doc`` goes on its own lines, indented by ``indent``:

    > flat
    [1, 2, 3]
    > broken
    [
      1,
      2,
      3
    ]
    """
    return group(
        glue(
            nest(indent, glue(left, doc, ''), NestMode.BREAK),
            right,
            '',
        )
    )


def fold_docs(fn, docs):
    """Left-folds ``docs`` pairwise with ``fn``."""
    docs = [cast_doc(doc) for doc in docs]
    if not docs:
        return NIL
    return reduce(fn, docs)


def join(docs, separator=','):
    """Joins docs with ``separator`` followed by a strict space break."""
    return fold_docs(
        lambda acc, doc: glue(Cons(acc, text(separator)), doc),
        docs,
    )
