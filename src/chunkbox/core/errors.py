class ChunkStorageError(Exception):
    """Failure in one of the chunk storage operations.

    `op` names the operation that failed, `cause` is the underlying error.
    """

    def __init__(self, op: str, cause):
        super().__init__(op, cause)
        self.op = op
        self.cause = cause

    def __str__(self):
        return f"{self.op}: {self.cause}"


class StoreError(ChunkStorageError):
    pass


class RetrieveError(ChunkStorageError):
    pass


class ItemNotFoundError(RetrieveError):
    """No chunk at index 0: nothing was stored under this name."""
