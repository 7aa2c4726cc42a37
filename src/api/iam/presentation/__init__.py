"""IAM presentation layer."""

from iam.presentation.errors import register_exception_handlers
from iam.presentation.routes import router

__all__ = ["register_exception_handlers", "router"]
