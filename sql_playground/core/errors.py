class PlaygroundError(Exception):
    """Base class for every failure the API turns into a JSON payload."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PlaygroundError):
    status_code = 400


class EmptyStatementError(ValidationError):
    def __init__(self, message: str = "Query cannot be empty."):
        super().__init__(message)


class EngineError(PlaygroundError):
    """The database engine rejected a statement (bad SQL, missing table, constraint...)."""

    @property
    def is_missing_table(self) -> bool:
        return "no such table" in self.message


class SessionStoreError(PlaygroundError):
    pass
