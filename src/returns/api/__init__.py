"""Returns domain API package."""

from returns.api.errors import register_error_handlers
from returns.api.routes import router

__all__ = ["router", "register_error_handlers"]
