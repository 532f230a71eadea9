"""Exception hierarchy for keyboard layout search."""


class LayoutSearchError(Exception):
    """Base exception for all layout search errors."""


class CorpusError(LayoutSearchError, OSError):
    """A corpus source could not be opened or read."""


class LayoutError(LayoutSearchError, ValueError):
    """A layout does not hold the 26 letters plus 4 blanks on a 3x10 grid."""


class KeyNotFoundError(LayoutSearchError, LookupError):
    """A symbol expected on the layout is missing (broken layout invariant)."""
