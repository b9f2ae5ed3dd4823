from .error_handler import handle_exception, setup_exception_handlers
from .logging import logging_middleware

__all__ = ["handle_exception", "setup_exception_handlers", "logging_middleware"]
