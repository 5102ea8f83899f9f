class PersistenceError(Exception):
    """Base class for article store failures."""


class ValidationError(PersistenceError):
    """A required article field is missing or malformed."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class DuplicateKeyError(PersistenceError):
    """An article with the same URL was stored by another writer."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Article already exists: {url}")
