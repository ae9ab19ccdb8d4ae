"""ASGI entrypoint for the diet balance API."""

from diet_balance.api.app import create_app
from diet_balance.containers import build_container

app = create_app(build_container())
