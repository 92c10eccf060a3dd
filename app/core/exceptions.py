"""Domain exceptions raised by services and mapped to HTTP errors in the API."""


class PersistenceError(Exception):
    """The store rejected a write. Nothing was persisted; callers may retry."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"{operation} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
