"""Engine exception types."""


class ValidationError(ValueError):
    """
    Raised when a calculation is asked to run on inputs it cannot accept.

    Raised before any computation happens, so no partial result exists.
    Subclasses ValueError so plain `except ValueError` callers keep working.
    """
    pass
