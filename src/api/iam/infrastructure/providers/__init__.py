"""OAuth2 provider gateways for IAM bounded context."""

from iam.infrastructure.providers.google import GoogleTokenExchanger

__all__ = ["GoogleTokenExchanger"]
