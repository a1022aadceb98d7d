from io import StringIO

import colorful
from pygments import styles
from pygments.lexers import ElixirLexer

default_style = styles.get_style_by_name('monokai')


def styleattrs_to_colorful(attrs):
    c = colorful.reset
    if attrs['color'] or attrs['bgcolor']:
        # colorful only names palette colors, so register hex values first
        accessor = ''
        if attrs['color']:
            colorful.update_palette({'relaxedCurrFg': attrs['color']})
            accessor = 'relaxedCurrFg'
        if attrs['bgcolor']:
            colorful.update_palette({'relaxedCurrBg': attrs['bgcolor']})
            accessor += '_on_relaxedCurrBg' if accessor else 'on_relaxedCurrBg'
        c &= getattr(colorful, accessor)
    if attrs['bold']:
        c &= colorful.bold
    if attrs['italic']:
        c &= colorful.italic
    if attrs['underline']:
        c &= colorful.underline
    return c


def highlight_to_stream(stream, source, style=None):
    if style is None:
        style = default_style
    elif isinstance(style, str):
        style = styles.get_style_by_name(style)

    lexer = ElixirLexer(stripnl=False, ensurenl=False)
    for ttype, value in lexer.get_tokens(source):
        if not value:
            continue
        color = styleattrs_to_colorful(style.style_for_token(ttype))
        stream.write(str(color))
        stream.write(value)

    stream.write(str(colorful.reset))


def highlight(source, style=None):
    """Returns ``source`` with ANSI escapes coloring its Elixir tokens.

    ``style`` is a pygments style class or style name, monokai by default.
    """
    stream = StringIO()
    highlight_to_stream(stream, source, style)
    return stream.getvalue()
