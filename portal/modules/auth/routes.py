from fastapi import APIRouter, Depends
from portal.core.access import resolve_is_super_admin
from portal.core.dependencies import get_current_user, get_project_access, get_project_token_service
from portal.modules.auth.schemas import CurrentUserResponse, ProjectTokenRequest, ProjectTokenResponse
from portal.modules.auth.service import ProjectTokenService
from portal.modules.projects.service import SupabaseProjectAccess
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/project-token", response_model=ProjectTokenResponse)
async def create_project_token(
    request: Optional[ProjectTokenRequest] = None,
    current_user: Dict = Depends(get_current_user),
    service: ProjectTokenService = Depends(get_project_token_service)
):
    """
    Generate a signed JWT (30 second expiry) that authenticates the caller into the
    external project application with their project role and permissions.
    """
    project_id = request.project_id if request else None
    return service.issue_project_token(current_user, project_id)


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    current_user: Dict = Depends(get_current_user),
    access: SupabaseProjectAccess = Depends(get_project_access)
):
    """Get current authenticated user and their global super admin status"""
    return CurrentUserResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        user_metadata=current_user.get("user_metadata") or {},
        is_super_admin=resolve_is_super_admin(current_user, access),
    )
