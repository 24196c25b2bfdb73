"""Errors raised while reducing molecular graphs."""


class MCSSError(Exception):
    """Base class for reduction errors."""


class OracleFailure(MCSSError):
    """A pairwise comparison rejected its input graphs."""


class MalformedFragment(MCSSError):
    """A common-fragment graph could not be wrapped into a Fragment."""
