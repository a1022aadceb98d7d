"""Recognizes the bracket punctuation whose inner side gets a space."""

from .doc import Text

# {, (, [, <<
OPENS = frozenset(['{', '(', '[', '<<'])

# }, ), ], >>
CLOSES = frozenset(['}', ')', ']', '>>'])


def is_open(text):
    return isinstance(text, str) and text in OPENS


def is_close(text):
    return isinstance(text, str) and text in CLOSES


def is_open_doc(doc):
    """True if ``doc`` is a ``Text`` leaf holding an opening bracket."""
    return isinstance(doc, Text) and doc.value in OPENS


def is_close_doc(doc):
    """True if ``doc`` is a ``Text`` leaf holding a closing bracket."""
    return isinstance(doc, Text) and doc.value in CLOSES
