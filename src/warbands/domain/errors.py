"""Exceptions for caller and data errors.

Rule violations are never raised; they are reported as
:class:`warbands.domain.models.RuleViolation` entries.  The classes below
signal contract breaks that should fail loudly.
"""


class WarbandError(Exception):
    """Base exception for the warband package."""


class CatalogError(WarbandError, ValueError):
    """Raised when catalog files are missing, malformed or inconsistent."""


class InvalidEditError(WarbandError, ValueError):
    """Raised when an edit names an unknown field or carries a bad value."""


class WarbandNotFoundError(WarbandError, LookupError):
    """Raised when a warband id is not present in storage."""


class WeirdoNotFoundError(WarbandError, LookupError):
    """Raised when a weirdo id is not part of the warband being edited."""
