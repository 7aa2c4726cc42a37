"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
provider gateways to fulfill use cases. They are the "front door" to
the IAM context.
"""

from iam.application.services.access_control_service import (
    AccessControlService,
    AccessRequest,
)
from iam.application.services.api_key_service import APIKeyService
from iam.application.services.app_authentication_service import (
    AppAuthenticationService,
)
from iam.application.services.authorization_service import AuthorizationService
from iam.application.services.identity_service import (
    IdentityService,
    ProviderRegistry,
)
from iam.application.services.tenancy_service import TenancyService

__all__ = [
    "AccessControlService",
    "AccessRequest",
    "APIKeyService",
    "AppAuthenticationService",
    "AuthorizationService",
    "IdentityService",
    "ProviderRegistry",
    "TenancyService",
]
