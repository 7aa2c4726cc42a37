"""HTTP routes for IAM bounded context."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from iam.application.value_objects import Audit
from iam.dependencies import require_access
from iam.presentation.models import WhoAmIResponse

router = APIRouter(
    prefix="/v1/auth",
    tags=["auth"],
)


@router.get("/whoami")
async def whoami(
    audit: Annotated[Audit, Depends(require_access)],
) -> WhoAmIResponse:
    """Return the application and user the request authenticated as.

    Requires a permission on ``/v1/auth/whoami`` for ``GET`` like any other
    protected route.
    """
    return WhoAmIResponse.from_audit(audit)
