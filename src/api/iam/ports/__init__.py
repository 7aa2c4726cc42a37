"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and provider gateways without
specifying implementation details. This allows for dependency inversion
and keeps the domain and application layers independent of infrastructure.
"""

from iam.ports.exceptions import UnauthenticatedError, UnauthorizedError
from iam.ports.providers import ITokenExchanger
from iam.ports.repositories import (
    EncryptedAPIKey,
    IApplicationRepository,
    IAuthorizationRepository,
    IAuthRepository,
)

__all__ = [
    "EncryptedAPIKey",
    "IApplicationRepository",
    "IAuthRepository",
    "IAuthorizationRepository",
    "ITokenExchanger",
    "UnauthenticatedError",
    "UnauthorizedError",
]
