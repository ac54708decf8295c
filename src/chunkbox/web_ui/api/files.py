import os
import asyncio
import logging
from aiohttp import web

from ...core import StoreError, RetrieveError, ItemNotFoundError, is_valid_item_path
from ..state import STORE_KEY, RETRIEVER_KEY

logger = logging.getLogger(__name__)


async def upload_file(request):
    """Stores the multipart `file` part as a chunked item named after its filename."""
    if not request.content_type.startswith('multipart/'):
        return web.Response(
            status=400, text=f"expected multipart form: got {request.content_type}")
    try:
        # Raises 413 past client_max_size before anything is stored
        form = await request.post()
    except ValueError as e:
        return web.Response(status=400, text=f"expected multipart form: {e}")

    field = form.get('file')
    if not isinstance(field, web.FileField):
        return web.Response(status=400, text="couldn't form file: no file part 'file'")
    filename = os.path.basename(field.filename or "")
    if not is_valid_item_path(filename):
        return web.Response(status=400, text=f"couldn't form file: invalid filename {filename!r}")

    store = request.app[STORE_KEY]
    loop = asyncio.get_running_loop()
    try:
        path = await loop.run_in_executor(None, store.store, field.file, filename)
    except StoreError as e:
        logger.error(f"Upload of {filename} failed: {e}")
        return web.Response(status=500, text=f"couldn't save file: {e}")
    finally:
        field.file.close()

    return web.Response(text=f"{path} saved")


async def download_file(request):
    """Returns the reassembled bytes of the item named by the `file` parameter."""
    name = request.query.get('file')
    if not name and request.method == 'POST':
        form = await request.post()
        name = form.get('file')
    if not name or not isinstance(name, str):
        return web.Response(status=400, text="missing 'file' parameter")
    name = os.path.basename(name)
    if not is_valid_item_path(name):
        return web.Response(status=400, text=f"invalid 'file' parameter {name!r}")

    retriever = request.app[RETRIEVER_KEY]
    loop = asyncio.get_running_loop()
    try:
        data = await loop.run_in_executor(None, retriever.retrieve, name)
    except ItemNotFoundError as e:
        return web.Response(status=404, text=f"Couldn't collect files: {e}")
    except RetrieveError as e:
        logger.error(f"Download of {name} failed: {e}")
        return web.Response(status=500, text=f"Couldn't collect files: {e}")

    return web.Response(body=data, content_type='application/octet-stream')
