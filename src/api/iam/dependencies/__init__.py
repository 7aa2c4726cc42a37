"""FastAPI dependency providers for IAM bounded context."""

from iam.dependencies.access_control import (
    get_access_control_service,
    get_api_key_service,
    get_provider_registry,
    get_realm,
    require_access,
)

__all__ = [
    "get_access_control_service",
    "get_api_key_service",
    "get_provider_registry",
    "get_realm",
    "require_access",
]
