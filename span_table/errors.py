"""Exceptions raised by the span-table pipeline."""


class SpanTableError(Exception):
    """Base class for span-table errors."""


class EmptyResultError(SpanTableError):
    """No eligible (or matching) span close events were found."""


class NoiseConfigError(SpanTableError):
    """The noise denylist configuration could not be loaded."""
