"""Error kinds raised by the store client and the post repository.

Hierarchy:
- NotFound: a link or id has no mapping
- StorageError: backend call failed or returned an unexpected absence
  - DecodeError: stored bytes do not parse as a Post
  - TransactionError: a MULTI/EXEC batch failed
"""


class BlogError(Exception):
    pass


class NotFound(BlogError):
    """Lookup key has no mapping in the store."""

    def __init__(self, key: str) -> None:
        super().__init__(f"{key} not found")
        self.key = key


class StorageError(BlogError):
    pass


class DecodeError(StorageError):
    pass


class TransactionError(StorageError):
    pass
