"""Layout algorithm turning a document tree into a stream of
``SText`` and ``SLine`` items for a given page width.

Each stack entry is an ``(indent, mode, doc)`` triple. In flat mode
every break is rendered as its separator. In break mode strict breaks
become newlines and flex breaks become newlines only when the content
up to the next break would overflow the line.
"""
from enum import Enum

from .doc import (
    Break,
    BreakMode,
    Cons,
    Doc,
    Force,
    Group,
    GroupMode,
    Line,
    Nest,
    NestIndent,
    NestMode,
    Tagged,
    Text,
)
from .sdoc import SLine, SText

INF_WIDTH = float('inf')


class Mode(Enum):
    FLAT = 'flat'
    BREAK = 'break'


def _doc_items(doc):
    return [item for item in doc.items if isinstance(item, Doc)]


def _fits(remaining, pending, rest):
    """Checks whether the docs in ``pending``, followed by the
    layout stack ``rest``, fit in ``remaining`` columns up to the next
    line break.

    ``pending`` is a stack of ``(mode, doc)`` and is consumed.
    """
    rest_idx = len(rest)

    while remaining >= 0:
        if pending:
            mode, doc = pending.pop()
        elif rest_idx:
            rest_idx -= 1
            _, mode, doc = rest[rest_idx]
        else:
            return True

        if isinstance(doc, str):
            remaining -= len(doc)
        elif isinstance(doc, Text):
            remaining -= len(doc.value)
        elif isinstance(doc, Line):
            return True
        elif isinstance(doc, Break):
            if mode is Mode.BREAK:
                return True
            remaining -= len(doc.separator)
        elif isinstance(doc, Cons):
            pending.append((mode, doc.right))
            pending.append((mode, doc.left))
        elif isinstance(doc, Nest):
            pending.append((mode, doc.doc))
        elif isinstance(doc, Group):
            if doc.mode is GroupMode.SELF:
                mode = Mode.FLAT
            pending.append((mode, doc.doc))
        elif isinstance(doc, Force):
            if mode is Mode.FLAT:
                return False
            pending.append((mode, doc.doc))
        elif isinstance(doc, Tagged):
            pending.extend((mode, item) for item in reversed(_doc_items(doc)))

    return False


def _nest_indent(doc, indent, mode, column):
    if doc.indent is NestIndent.CURSOR:
        return column
    elif doc.indent is NestIndent.RESET:
        return 0
    elif doc.mode is NestMode.BREAK and mode is Mode.FLAT:
        return indent
    return indent + doc.indent


def layout(doc, width=None):
    if width is None:
        width = INF_WIDTH

    column = 0
    stack = [(0, Mode.BREAK, doc)]

    while stack:
        indent, mode, doc = stack.pop()

        if isinstance(doc, str):
            column += len(doc)
            yield SText(doc)
        elif isinstance(doc, Text):
            column += len(doc.value)
            yield SText(doc.value)
        elif isinstance(doc, Line):
            column = indent
            yield SLine(indent)
        elif isinstance(doc, Cons):
            stack.append((indent, mode, doc.right))
            stack.append((indent, mode, doc.left))
        elif isinstance(doc, Nest):
            stack.append((_nest_indent(doc, indent, mode, column), mode, doc.doc))
        elif isinstance(doc, Break):
            separator = doc.separator
            if mode is Mode.FLAT or (
                doc.mode is BreakMode.FLEX and
                _fits(width - column - len(separator), [], stack)
            ):
                column += len(separator)
                yield SText(separator)
            else:
                column = indent
                yield SLine(indent)
        elif isinstance(doc, Group):
            if mode is Mode.FLAT:
                stack.append((indent, Mode.FLAT, doc.doc))
            elif doc.mode is GroupMode.INHERIT:
                stack.append((indent, Mode.BREAK, doc.doc))
            elif _fits(width - column, [(Mode.FLAT, doc.doc)], stack):
                stack.append((indent, Mode.FLAT, doc.doc))
            else:
                stack.append((indent, Mode.BREAK, doc.doc))
        elif isinstance(doc, Force):
            stack.append((indent, Mode.BREAK, doc.doc))
        elif isinstance(doc, Tagged):
            stack.extend(
                (indent, mode, item) for item in reversed(_doc_items(doc))
            )
