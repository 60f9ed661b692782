"""
Exception hierarchy for the NeuroNet learning core.

Conversion failures are ValueError subclasses so callers that already guard
numeric parsing with ``except ValueError`` keep working.
"""


class NeuroNetError(Exception):
    """Base class for all NeuroNet errors."""


class ConversionError(NeuroNetError, ValueError):
    """A value could not be converted between number systems."""


class InvalidFormatError(ConversionError):
    """Input text does not match the digit set of the declared base."""


class OutOfRangeError(ConversionError):
    """Input is well-formed but outside the supported range."""


class DailyChallengeAlreadyCompletedError(NeuroNetError):
    """The daily challenge was already completed today."""
