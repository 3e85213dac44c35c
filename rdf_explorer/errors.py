"""Errors raised at the parse and chat boundaries."""


class ParseError(ValueError):
    """The Turtle text could not be parsed."""


class EmptyGraphError(ValueError):
    """The text parsed but produced no nodes."""

    def __init__(self, message: str = "No valid entities found in the dataset."):
        super().__init__(message)


class ServiceError(RuntimeError):
    """The chat service is unconfigured or the request failed."""
