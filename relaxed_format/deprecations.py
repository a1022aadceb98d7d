"""Renames of deprecated remote calls, applied when the caller gives the
minimum language version their code supports."""
import logging

from packaging import version

logger = logging.getLogger(__name__)

# (module, function, arity): (replacement, deprecated since)
DEPRECATED_CALLS = {
    ('Enum', 'partition', 2): ('split_with', '1.4.0'),
    ('Enum', 'chunk', 2): ('chunk_every', '1.5.0'),
    ('String', 'strip', 1): ('trim', '1.5.0'),
    ('String', 'lstrip', 1): ('trim_leading', '1.5.0'),
    ('String', 'rstrip', 1): ('trim_trailing', '1.5.0'),
    ('Kernel', 'to_char_list', 1): ('to_charlist', '1.5.0'),
}


def parse_version(value):
    """Parses ``value`` into a ``packaging`` version.

    Raises ``ValueError`` for strings that are not valid versions.
    """
    if isinstance(value, version.Version):
        return value
    try:
        return version.Version(value)
    except version.InvalidVersion:
        raise ValueError(f'Invalid version: {repr(value)}') from None


def rename(module, function, arity, at):
    """Returns the name ``module.function/arity`` should be renamed to,
    or ``None`` when it was not deprecated at version ``at``."""
    entry = DEPRECATED_CALLS.get((module, function, arity))
    if entry is None:
        return None

    replacement, since = entry
    if parse_version(since) > parse_version(at):
        return None

    logger.debug(
        'Renaming deprecated %s.%s/%d to %s',
        module, function, arity, replacement,
    )
    return replacement
