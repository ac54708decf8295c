"""Tests for ChunkedRetriever: reassembly, end-of-sequence and error kinds."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from chunkbox.core import (
    CHUNK_SIZE, ChunkedRetriever, ChunkedStore,
    ItemNotFoundError, RetrieveError,
)

SMALL_CHUNK = 16


def make_pair(root: Path, chunk_size: int = SMALL_CHUNK):
    return (ChunkedStore(str(root), chunk_size=chunk_size),
            ChunkedRetriever(str(root), chunk_size=chunk_size))


def test_round_trip_small_chunks(upload_root: Path) -> None:
    store, retriever = make_pair(upload_root)
    data = bytes(range(1, 200)) * 3

    store.store(io.BytesIO(data), "doc")

    assert retriever.retrieve("doc") == data


def test_round_trip_default_chunk_size(upload_root: Path) -> None:
    store, retriever = make_pair(upload_root, CHUNK_SIZE)
    data = b"0123456789" * (CHUNK_SIZE // 4)  # 2.5 chunks

    store.store(io.BytesIO(data), "big")

    assert retriever.retrieve("big") == data


def test_only_second_store_survives(upload_root: Path) -> None:
    store, retriever = make_pair(upload_root)
    store.store(io.BytesIO(b"first" * 10), "same")
    store.store(io.BytesIO(b"second"), "same")

    assert retriever.retrieve("same") == b"second"


def test_trailing_zeros_are_stripped(upload_root: Path) -> None:
    store, retriever = make_pair(upload_root)

    store.store(io.BytesIO(b"abc\x00\x00"), "zeros")

    # Padding and real trailing zeros are indistinguishable on disk
    assert retriever.retrieve("zeros") == b"abc"


def test_interior_zeros_are_kept(upload_root: Path) -> None:
    store, retriever = make_pair(upload_root)
    data = b"a\x00\x00b" * 10

    store.store(io.BytesIO(data), "inner")

    assert retriever.retrieve("inner") == data


def test_missing_item_is_not_found(upload_root: Path) -> None:
    _, retriever = make_pair(upload_root)

    with pytest.raises(ItemNotFoundError) as exc_info:
        retriever.retrieve("ghost")

    assert exc_info.value.op == "retrieve"


def test_empty_item_directory_is_not_found(upload_root: Path) -> None:
    (upload_root / "hollow").mkdir()
    _, retriever = make_pair(upload_root)

    with pytest.raises(ItemNotFoundError):
        retriever.retrieve("hollow")


def test_empty_upload_is_not_found(upload_root: Path) -> None:
    store, retriever = make_pair(upload_root)
    store.store(io.BytesIO(b""), "nothing")

    with pytest.raises(ItemNotFoundError):
        retriever.retrieve("nothing")


def test_sequence_ends_at_first_gap(upload_root: Path) -> None:
    item_dir = upload_root / "gappy"
    item_dir.mkdir()
    (item_dir / "0").write_bytes(b"A" * SMALL_CHUNK)
    (item_dir / "2").write_bytes(b"C" * SMALL_CHUNK)
    _, retriever = make_pair(upload_root)

    assert retriever.retrieve("gappy") == b"A" * SMALL_CHUNK


def test_unreadable_chunk_is_io_failure(upload_root: Path) -> None:
    item_dir = upload_root / "damaged"
    item_dir.mkdir()
    (item_dir / "0").write_bytes(b"A" * SMALL_CHUNK)
    (item_dir / "1").mkdir()
    _, retriever = make_pair(upload_root)

    with pytest.raises(RetrieveError) as exc_info:
        retriever.retrieve("damaged")

    assert not isinstance(exc_info.value, ItemNotFoundError)


def test_empty_chunk_file_is_io_failure(upload_root: Path) -> None:
    item_dir = upload_root / "truncated"
    item_dir.mkdir()
    (item_dir / "0").write_bytes(b"")
    _, retriever = make_pair(upload_root)

    with pytest.raises(RetrieveError) as exc_info:
        retriever.retrieve("truncated")

    assert not isinstance(exc_info.value, ItemNotFoundError)


@pytest.mark.parametrize("name", ["", ".", ".."])
def test_dot_names_are_rejected(upload_root: Path, name: str) -> None:
    _, retriever = make_pair(upload_root)

    with pytest.raises(RetrieveError, match="invalid item name") as exc_info:
        retriever.retrieve(name)

    assert not isinstance(exc_info.value, ItemNotFoundError)
