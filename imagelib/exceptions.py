"""
Exception hierarchy for imagelib.

- InvalidArgument: the caller passed something unusable (bad colour channel,
  non-positive size, unknown format).
- OperationFailed: a delegated pixel or codec operation reported failure.

Neither derives from ValueError so pydantic validators let them propagate
unwrapped out of model construction.
"""


class ImageLibError(Exception):
    """Base class for all imagelib errors."""

    pass


class InvalidArgument(ImageLibError):
    """Raised when an argument is outside its accepted range."""

    pass


class OperationFailed(ImageLibError):
    """Raised when the underlying pixel operation could not be performed."""

    pass
