class FormatSyntaxError(SyntaxError):
    """Raised when the source cannot be tokenized or parsed.

    Carries the usual ``SyntaxError`` location attributes: ``filename``,
    ``lineno``, ``offset`` (1-based column) and ``text`` (the source line).
    """

    def __init__(self, msg, file='nofile', line=1, column=1, source_line=None):
        super().__init__(msg, (file, line, column, source_line))

    def __str__(self):
        return f'{self.filename}:{self.lineno}:{self.offset}: {self.msg}'


class UnsupportedSyntaxError(FormatSyntaxError):
    """Raised for valid source that lies outside the syntax the
    formatter understands, such as ``do``/``end`` blocks."""
