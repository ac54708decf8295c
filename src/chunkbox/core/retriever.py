import os
import logging

from .errors import RetrieveError, ItemNotFoundError
from .layout import CHUNK_SIZE, chunk_path, is_valid_item_path

logger = logging.getLogger(__name__)


class ChunkedRetriever:
    """Rebuilds an item from the chunk files written by ChunkedStore."""

    def __init__(self, root: str, chunk_size: int = CHUNK_SIZE):
        self.root = root
        self.chunk_size = chunk_size

    def resolve(self, name: str) -> str:
        return os.path.join(self.root, name)

    def retrieve(self, item_path: str) -> bytes:
        """
        Concatenates chunks 0, 1, 2, ... until the first missing index.

        Trailing zero bytes are stripped from the result to undo the padding
        of the last chunk, so content that really ends in zeros loses them.
        Raises ItemNotFoundError when chunk 0 does not exist.
        """
        if not is_valid_item_path(item_path):
            raise RetrieveError("retrieve", f"invalid item name {item_path!r}")
        path = self.resolve(item_path)
        out = bytearray()

        index = 0
        while True:
            file_path = chunk_path(path, index)
            buffer = bytearray(self.chunk_size)
            try:
                with open(file_path, 'rb') as f:
                    n = f.readinto(buffer)
            except FileNotFoundError as e:
                if index == 0:
                    raise ItemNotFoundError("retrieve", e) from e
                break
            except OSError as e:
                raise RetrieveError("retrieve", e) from e

            if not n:
                raise RetrieveError("retrieve", f"chunk {file_path} is empty")
            out += buffer
            index += 1

        logger.debug(f"Collected {index} chunks from {path}")
        return bytes(out).rstrip(b"\x00")
