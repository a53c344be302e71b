"""ASGI entrypoint for the outfit draw API."""

from outfit_draw.context import build_context
from outfit_draw.main import create_app

app = create_app(build_context())
