"""Module for custom exceptions. This should contain base classes. Children of these base classes should be defined in the modules where they are used."""


class DataFormatError(Exception):
    """The embedded chain dataset could not be parsed into chain records.

    Raised at load time. Retrying will not help, the data files are static.
    """

    def __init__(self, message: str):
        super().__init__(message)


class NotFoundError(Exception):
    """Exception raised when data is not found. Currently a base class for ChainNotFoundError."""

    def __init__(self, message: str):
        super().__init__(message)
