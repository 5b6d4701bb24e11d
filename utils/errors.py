"""Error types shared by the server and client layers."""


class StorageError(RuntimeError):
    """Raised by the data access layer when the database cannot serve a request.

    The message is deliberately generic; the underlying driver error is
    chained as ``__cause__`` and logged where it happens.
    """


class ApiRequestError(RuntimeError):
    """Raised by the API client when a request fails.

    Attributes:
        status_code: HTTP status of the failed response, or None when the
            request never produced one.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
