from enum import Enum, unique


@unique
class BreakMode(Enum):
    STRICT = 'strict'
    FLEX = 'flex'


@unique
class NestMode(Enum):
    ALWAYS = 'always'
    BREAK = 'break'


@unique
class NestIndent(Enum):
    CURSOR = 'cursor'
    RESET = 'reset'


@unique
class GroupMode(Enum):
    SELF = 'self'
    INHERIT = 'inherit'


def is_doc(value):
    return isinstance(value, Doc)


class Doc:
    """Base class of the document tree.

    Docs are never mutated after construction; transformations build
    new nodes and may share untouched subtrees with their input.
    """
    __slots__ = ()

    def fields(self):
        return tuple(getattr(self, name) for name in self.__slots__)

    def __eq__(self, other):
        # Iterative, so that deep concatenation chains compare without
        # hitting the recursion limit.
        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a is b:
                continue
            if isinstance(a, Doc):
                if type(a) is not type(b):
                    return False
                a_fields, b_fields = a.fields(), b.fields()
                if len(a_fields) != len(b_fields):
                    return False
                pending.extend(zip(a_fields, b_fields))
            elif a != b:
                return False
        return True

    __hash__ = None


class Nil(Doc):
    def __repr__(self):
        return 'NIL'


NIL = Nil()


class Line(Doc):
    def __repr__(self):
        return 'LINE'


LINE = Line()


class Text(Doc):
    __slots__ = ('value', )

    def __init__(self, value):
        if not isinstance(value, str):
            raise TypeError(
                f"Got {repr(value)} of type {type(value).__name__}, "
                "expected 'str'"
            )
        self.value = value

    def __repr__(self):
        return f'Text({repr(self.value)})'


class Cons(Doc):
    __slots__ = ('left', 'right')

    def __init__(self, left, right):
        self.left = left
        self.right = right

    def __repr__(self):
        return f'Cons({repr(self.left)}, {repr(self.right)})'


class Break(Doc):
    __slots__ = ('separator', 'mode')

    def __init__(self, separator, mode=BreakMode.STRICT):
        if not isinstance(separator, str):
            raise TypeError(
                f"Break separator must be a str, got {type(separator).__name__}"
            )
        self.separator = separator
        self.mode = BreakMode(mode)

    def __repr__(self):
        return f'Break({repr(self.separator)}, {self.mode})'


class Nest(Doc):
    __slots__ = ('doc', 'indent', 'mode')

    def __init__(self, doc, indent, mode=NestMode.ALWAYS):
        if not isinstance(indent, (int, NestIndent)):
            raise TypeError(
                f"Nest indent must be an int or NestIndent, got {repr(indent)}"
            )
        self.doc = doc
        self.indent = indent
        self.mode = NestMode(mode)

    def __repr__(self):
        return f'Nest({repr(self.doc)}, {repr(self.indent)}, {self.mode})'


class Group(Doc):
    __slots__ = ('doc', 'mode')

    def __init__(self, doc, mode=GroupMode.SELF):
        self.doc = doc
        self.mode = GroupMode(mode)

    def __repr__(self):
        return f'Group({repr(self.doc)}, {self.mode})'


class Force(Doc):
    __slots__ = ('doc', )

    def __init__(self, doc):
        self.doc = doc

    def __repr__(self):
        return f'Force({repr(self.doc)})'


class Tagged(Doc):
    """A composite node with an arbitrary tag and payload.

    The layout algorithm treats it as transparent, laying out the
    payload items that are docs in order. Other consumers may give the
    tag a meaning of their own.
    """
    __slots__ = ('tag', 'items')

    def __init__(self, tag, *items):
        self.tag = tag
        self.items = items

    def fields(self):
        return (self.tag, *self.items)

    def __repr__(self):
        args = ', '.join(repr(item) for item in self.fields())
        return f'Tagged({args})'
