"""ASGI entrypoint for the wedding share API."""

from wedding_share.api.app import create_app
from wedding_share.containers import build_container

app = create_app(build_container())
