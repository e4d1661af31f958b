"""ASGI entrypoint for the nutrilog API."""

from nutrilog.api.app import create_app
from nutrilog.app_logging import configure_logging
from nutrilog.config import Settings
from nutrilog.containers import build_container

settings = Settings()
configure_logging(settings.log_level)
app = create_app(build_container(settings))
