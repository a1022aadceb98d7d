# -*- coding: utf-8 -*-

"""Top-level package for relaxed_format."""

__author__ = """Tommi Kaikkonen"""
__email__ = 'kaikkonentommi@gmail.com'
__version__ = '0.1.0'

import logging

from .api import (
    break_,
    flex_break,
    concat,
    force,
    glue,
    group,
    line,
    nest,
    surround,
    text,
    NIL,
    LINE,
)
from .errors import FormatSyntaxError, UnsupportedSyntaxError
from .formatter import to_doc
from .relax import relax_space
from .render import render_to_str

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_LINE_LENGTH = 98


__all__ = [
    'format_string',
    'format_file',
    'cformat_string',
    'to_doc',
    'relax_space',
    'render_to_str',
    'FormatSyntaxError',
    'UnsupportedSyntaxError',
    'break_',
    'flex_break',
    'concat',
    'force',
    'glue',
    'group',
    'line',
    'nest',
    'surround',
    'text',
    'NIL',
    'LINE',
]


def _trim_trailing_whitespace(rendered):
    return '\n'.join(line.rstrip() for line in rendered.split('\n'))


def format_string(
    source,
    *,
    line_length=DEFAULT_LINE_LENGTH,
    locals_without_parens=(),
    rename_deprecated_at=None,
    file='nofile',
    line=1
):
    """Formats Elixir ``source`` with a space on the inner side of every
    bracket pair and returns the formatted text.

    ``line_length`` is the width aimed for; it is not enforced when a
    single token is longer. ``file`` and ``line`` are used in the
    location of syntax errors.
    """
    logger.debug('Formatting %s with line length %s', file, line_length)
    doc = to_doc(
        source,
        locals_without_parens=locals_without_parens,
        rename_deprecated_at=rename_deprecated_at,
        file=file,
        line=line,
    )
    relaxed = relax_space(doc)
    return _trim_trailing_whitespace(render_to_str(relaxed, line_length))


def format_file(path, **options):
    """Formats a file and returns its contents with a trailing newline.

    See ``format_string`` for the options. ``file`` and ``line`` always
    come from ``path``, whatever ``options`` holds.
    """
    with open(path, encoding='utf-8') as f:
        source = f.read()
    formatted = format_string(source, **{**options, 'file': path, 'line': 1})
    return formatted + '\n'


try:
    from .extras.color import highlight
except ImportError:
    def cformat_string(*args, **kwargs):
        raise ImportError(
            "You need to install the 'pygments' and 'colorful' packages "
            "for colored output."
        )
else:
    def cformat_string(source, *, style=None, **options):
        """Like ``format_string``, with the result syntax highlighted for
        a terminal."""
        return highlight(format_string(source, **options), style=style)
