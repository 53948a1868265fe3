# Entry point: uvicorn server.main:app
from aibridge.observability import configure_logging
from aibridge.wiring import get_app_settings
from server.app import app

configure_logging(get_app_settings().log_level)

__all__ = ["app"]
