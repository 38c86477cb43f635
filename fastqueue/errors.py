"""Exceptions raised by the server."""


class CorruptionException(Exception):
    """Stored data failed a consistency check."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message