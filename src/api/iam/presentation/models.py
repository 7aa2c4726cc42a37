"""Pydantic models for IAM API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.application.value_objects import Audit


class WhoAmIResponse(BaseModel):
    """The application and user a request was authenticated as.

    Only external ids are exposed; internal ULIDs never leave the service.
    """

    app_external_id: str = Field(..., description="Calling application external id")
    app_name: str = Field(..., description="Calling application name")
    org_external_id: str = Field(
        ..., description="External id of the organization owning the application"
    )
    user_external_id: str = Field(..., description="Authenticated user external id")
    email: str = Field(..., description="Authenticated user email")
    moment: datetime = Field(..., description="When the request was received")

    @classmethod
    def from_audit(cls, audit: Audit) -> WhoAmIResponse:
        """Convert a request Audit to an API response."""
        return cls(
            app_external_id=audit.app.external_id.value,
            app_name=audit.app.name,
            org_external_id=audit.app.org.external_id.value,
            user_external_id=audit.user.external_id.value,
            email=audit.user.email,
            moment=audit.moment,
        )
