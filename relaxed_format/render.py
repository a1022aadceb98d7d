from io import StringIO

from .layout import layout
from .sdoc import SText, SLine


def default_render_to_stream(stream, sdocs, newline='\n', separator=' '):
    evald = list(sdocs)
    for sdoc in evald:
        if isinstance(sdoc, SText):
            stream.write(sdoc.value)
        elif isinstance(sdoc, SLine):
            stream.write(newline + separator * sdoc.indent)


def default_render_to_str(sdocs, newline='\n', separator=' '):
    stream = StringIO()
    default_render_to_stream(stream, sdocs, newline, separator)
    return stream.getvalue()


def render_to_str(doc, width):
    """Lays out ``doc`` for a page ``width`` characters wide and returns
    the text. A width of ``None`` never breaks a line that can stay flat."""
    return default_render_to_str(layout(doc, width))
