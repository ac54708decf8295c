import argparse
import logging
import os
import sys

from .core import (
    ChunkedStore, ChunkedRetriever, StoreError, RetrieveError, ItemNotFoundError,
    is_valid_item_path,
)

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_DIR = "downloads"


def serve(args):
    """Starts the upload/download web server."""
    from .web_ui import start_web_server
    # An existing root is fine, anything else stops startup
    try:
        os.makedirs(args.upload_dir, exist_ok=True)
    except OSError as e:
        logger.error(f"Couldn't create directory {args.upload_dir}: {e}")
        return 1
    start_web_server(host=args.host, port=args.port, upload_dir=args.upload_dir)
    return 0


def store(args):
    """Stores a local file as a chunked item."""
    if not os.path.isfile(args.file):
        print(f"Error: File {args.file} not found.")
        return 1

    name = args.name or os.path.basename(args.file)
    if not is_valid_item_path(name):
        print(f"Error: invalid item name {name!r}.")
        return 1
    chunk_store = ChunkedStore(args.upload_dir)
    try:
        os.makedirs(args.upload_dir, exist_ok=True)
        with open(args.file, 'rb') as f:
            path = chunk_store.store(f, name)
    except (StoreError, OSError) as e:
        print(f"Error: couldn't save file: {e}")
        return 1

    print(f"{path} saved")
    return 0


def retrieve(args):
    """Rebuilds a stored item into a local file."""
    retriever = ChunkedRetriever(args.upload_dir)
    try:
        data = retriever.retrieve(args.name)
    except ItemNotFoundError:
        print(f"Error: no item named {args.name} in {args.upload_dir}.")
        return 1
    except RetrieveError as e:
        print(f"Error: couldn't collect files: {e}")
        return 1

    with open(args.output, 'wb') as f:
        f.write(data)
    print(f"File reconstructed: {args.output} ({len(data)} bytes)")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Chunked file storage service")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Command: SERVE
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP server")
    serve_parser.add_argument(
        "--host", type=str, default="0.0.0.0", help="Host")
    serve_parser.add_argument(
        "--port", type=int, default=8080, help="Port to listen on")
    serve_parser.add_argument(
        "--upload-dir", type=str, default=DEFAULT_UPLOAD_DIR, help="Upload root folder")

    # Command: STORE
    store_parser = subparsers.add_parser("store", help="Store a local file")
    store_parser.add_argument("file", help="Input file")
    store_parser.add_argument(
        "--name", help="Item name (default: the file's basename)")
    store_parser.add_argument(
        "--upload-dir", type=str, default=DEFAULT_UPLOAD_DIR, help="Upload root folder")

    # Command: RETRIEVE
    rec_parser = subparsers.add_parser("retrieve", help="Rebuild a stored item")
    rec_parser.add_argument("name", help="Item name")
    rec_parser.add_argument("output", help="Output file")
    rec_parser.add_argument(
        "--upload-dir", type=str, default=DEFAULT_UPLOAD_DIR, help="Upload root folder")

    return parser


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        return serve(args)
    elif args.command == "store":
        return store(args)
    elif args.command == "retrieve":
        return retrieve(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
