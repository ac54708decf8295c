from aiohttp import web

from ..core import ChunkedStore, ChunkedRetriever

# Components live on the application, one pair per upload root
STORE_KEY = web.AppKey("store", ChunkedStore)
RETRIEVER_KEY = web.AppKey("retriever", ChunkedRetriever)
