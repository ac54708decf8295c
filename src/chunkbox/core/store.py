import os
import shutil
import logging
from typing import BinaryIO

from .errors import StoreError
from .layout import CHUNK_SIZE, chunk_path, is_valid_item_path

logger = logging.getLogger(__name__)


class ChunkedStore:
    """
    Writes a byte stream as a directory of fixed-size chunk files.

    Layout: <root>/<item>/0, <root>/<item>/1, ... Every chunk file is exactly
    `chunk_size` bytes, the last one zero-padded. Storing to an existing item
    replaces it entirely.

    There is no locking: two stores (or a store and a retrieve) on the same
    item must be serialized by the caller.
    """

    def __init__(self, root: str, chunk_size: int = CHUNK_SIZE):
        self.root = root
        self.chunk_size = chunk_size

    def resolve(self, name: str) -> str:
        return os.path.join(self.root, name)

    def store(self, stream: BinaryIO, item_path: str) -> str:
        """
        Splits `stream` into chunk files under `item_path`.
        `item_path` may be absolute or relative to the root.
        Returns the item directory path.
        """
        # `.` or `..` would resolve to the root or its parent and get wiped below
        if not is_valid_item_path(item_path):
            raise StoreError("store", f"invalid item name {item_path!r}")
        path = self.resolve(item_path)
        self._create_item_dir(path)

        index = 0
        while True:
            try:
                data = stream.read(self.chunk_size)
            except OSError as e:
                raise StoreError("store", e) from e
            if not data:
                break

            # Short reads still produce a full, zero-padded chunk
            buffer = bytearray(self.chunk_size)
            buffer[:len(data)] = data

            file_path = chunk_path(path, index)
            logger.info(f"creating {file_path}")
            try:
                with open(file_path, 'wb') as f:
                    f.write(buffer)
            except OSError as e:
                raise StoreError("store", e) from e
            index += 1

        logger.debug(f"Stored {index} chunks in {path}")
        return path

    def _create_item_dir(self, path: str):
        logger.info(f"creating {path}")
        try:
            os.mkdir(path)
            return
        except FileExistsError:
            logger.info(f"{path} already exists. removing")
        except OSError as e:
            raise StoreError("store", e) from e

        try:
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.remove(path)
            # A second failure here means something else owns the path
            os.mkdir(path)
        except OSError as e:
            raise StoreError("store", e) from e
