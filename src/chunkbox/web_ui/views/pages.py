import aiohttp_jinja2

from ..state import STORE_KEY


@aiohttp_jinja2.template('index.html')
async def handle_index(request):
    store = request.app[STORE_KEY]
    return {
        "upload_dir": store.root,
        "chunk_size": store.chunk_size,
    }
