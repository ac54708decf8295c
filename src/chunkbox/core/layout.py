import os

CHUNK_SIZE = 1024 * 1024  # 1MB chunks


def chunk_path(item_path: str, index: int) -> str:
    """Chunk files are named by their zero-based index, no padding or extension."""
    return os.path.join(item_path, str(index))


def is_valid_item_path(item_path: str) -> bool:
    """The last component must name a real subdirectory: not empty, `.` or `..`."""
    return os.path.basename(item_path.rstrip(os.sep)) not in ("", ".", "..")
