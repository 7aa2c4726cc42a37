"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.access_control_probe import (
    AccessControlProbe,
    DefaultAccessControlProbe,
)
from iam.application.observability.api_key_service_probe import (
    APIKeyServiceProbe,
    DefaultAPIKeyServiceProbe,
)
from iam.application.observability.app_authentication_probe import (
    AppAuthenticationProbe,
    DefaultAppAuthenticationProbe,
)
from iam.application.observability.authorization_probe import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)
from iam.application.observability.identity_probe import (
    DefaultIdentityProbe,
    IdentityProbe,
)
from iam.application.observability.tenancy_probe import (
    DefaultTenancyProbe,
    TenancyProbe,
)

__all__ = [
    "AccessControlProbe",
    "DefaultAccessControlProbe",
    "APIKeyServiceProbe",
    "DefaultAPIKeyServiceProbe",
    "AppAuthenticationProbe",
    "DefaultAppAuthenticationProbe",
    "AuthorizationProbe",
    "DefaultAuthorizationProbe",
    "IdentityProbe",
    "DefaultIdentityProbe",
    "TenancyProbe",
    "DefaultTenancyProbe",
]
