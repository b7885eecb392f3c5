"""
Error kinds raised by the aggregation engine.
"""


class ValidationError(ValueError):
    """Request rejected before any table access (e.g. empty identifier)."""


class MalformedSourceError(ValueError):
    """Source text cannot be loaded as a table at all (missing header line)."""


class ExternalSourceError(RuntimeError):
    """The external ML service call failed or returned an unusable payload."""
