"""
Error taxonomy.

Parse failures and range violations both derive from ValueError so callers
that only care about "bad input" can catch that.
"""


class MusicTheoryError(Exception):
    """Base class for all errors raised by bach_theory."""


class MusicFormatError(MusicTheoryError, ValueError):
    """A string could not be parsed into a music value."""


class MusicRangeError(MusicTheoryError, ValueError):
    """A value was constructed outside of its legal domain."""


class InternalTableError(MusicTheoryError, RuntimeError):
    """A static lookup table is inconsistent. Always a bug."""


class CatalogError(MusicTheoryError, LookupError):
    """A catalog entry is missing or the catalog data is malformed."""


class ConfigError(MusicTheoryError, ValueError):
    """The configuration file could not be read or is invalid."""
