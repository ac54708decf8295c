import os
import logging
import aiohttp_jinja2
import jinja2
from aiohttp import web

from ..core import ChunkedStore, ChunkedRetriever, CHUNK_SIZE
from .api.files import upload_file, download_file
from .views.pages import handle_index
from .state import STORE_KEY, RETRIEVER_KEY

logger = logging.getLogger(__name__)

MAX_FORM_SIZE = 64 * 1024 * 1024  # 64MB multipart bound


def create_app(upload_dir: str, client_max_size: int = MAX_FORM_SIZE,
               chunk_size: int = CHUNK_SIZE) -> web.Application:
    """Builds the application around one upload root. The root must already exist."""
    app = web.Application(client_max_size=client_max_size)
    app[STORE_KEY] = ChunkedStore(upload_dir, chunk_size=chunk_size)
    app[RETRIEVER_KEY] = ChunkedRetriever(upload_dir, chunk_size=chunk_size)

    templates_path = os.path.join(os.path.dirname(__file__), 'templates')
    aiohttp_jinja2.setup(app, loader=jinja2.FileSystemLoader(templates_path))

    app.add_routes([
        web.get('/', handle_index),
        web.post('/upload', upload_file),
        web.get('/download', download_file),
        web.post('/download', download_file),
    ])
    return app


def start_web_server(host="0.0.0.0", port=8080, upload_dir="downloads"):
    app = create_app(upload_dir)
    logger.info(f"started listening at {host}:{port}...")
    web.run_app(app, host=host, port=port, print=None)
