"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.repository_probe import (
    ApplicationRepositoryProbe,
    AuthorizationRepositoryProbe,
    AuthRepositoryProbe,
    DefaultApplicationRepositoryProbe,
    DefaultAuthorizationRepositoryProbe,
    DefaultAuthRepositoryProbe,
)

__all__ = [
    "ApplicationRepositoryProbe",
    "DefaultApplicationRepositoryProbe",
    "AuthRepositoryProbe",
    "DefaultAuthRepositoryProbe",
    "AuthorizationRepositoryProbe",
    "DefaultAuthorizationRepositoryProbe",
]
