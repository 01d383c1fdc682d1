class ShortenerError(Exception):
    """Base class for mapping failures raised by the service layer."""


class InvalidInput(ShortenerError):
    def __init__(self, message: str, loc=("query", "alias")):
        self.loc = loc
        super().__init__(message)


class AliasConflict(ShortenerError):
    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"Alias '{alias}' already in use")


class UniquenessViolation(ShortenerError):
    """An insert hit a unique constraint (url, short_code or alias).

    Never reaches the caller: the service re-reads and returns the winning row.
    """


class NotFound(ShortenerError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No URL found for '{key}'")


class StoreFailure(ShortenerError):
    pass
