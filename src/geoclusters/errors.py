"""Error types raised by geoclusters."""


class InvalidInputError(ValueError):
    """An argument does not have a shape the operation can work with."""
