"""Exception taxonomy for the river-crossing search.

Exhausting the iteration cap or the frontier is not an error; it is reported
through ``SearchResult.status``.
"""


class SearchError(Exception):
    """Base class for every error raised by rivercross."""


class ConfigurationError(SearchError, ValueError):
    """Rejected search input (non-numeric or negative counts, bad config file)."""


class InvariantViolation(SearchError, AssertionError):
    """Internal consistency check failed. Indicates a defect, never caught here."""
