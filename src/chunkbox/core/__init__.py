from .errors import ChunkStorageError, StoreError, RetrieveError, ItemNotFoundError
from .layout import CHUNK_SIZE, is_valid_item_path
from .store import ChunkedStore
from .retriever import ChunkedRetriever
