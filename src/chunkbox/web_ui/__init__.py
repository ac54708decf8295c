from .server import create_app, start_web_server
