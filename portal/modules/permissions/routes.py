from fastapi import APIRouter, Depends
from portal.core.dependencies import get_current_user, get_project_access
from portal.modules.permissions.schemas import (
    MemberPermissionsResponse, MemberPermissionsUpdate, MemberPermissionsUpdateResponse,
    PermissionCatalogResponse, ProjectMemberWithAccess
)
from portal.modules.permissions.service import ProjectPermissionService
from portal.modules.projects.service import SupabaseProjectAccess
from typing import Dict, List

router = APIRouter(tags=["permissions"])


def get_permission_service(
    access: SupabaseProjectAccess = Depends(get_project_access)
) -> ProjectPermissionService:
    return ProjectPermissionService(access)


@router.get("/permissions/catalog", response_model=PermissionCatalogResponse)
async def get_permission_catalog(
    current_user: Dict = Depends(get_current_user),
    service: ProjectPermissionService = Depends(get_permission_service)
):
    """Permission labels, display groups and templates for the permission editor"""
    return service.get_catalog()


@router.get("/projects/{project_id}/members", response_model=List[ProjectMemberWithAccess])
async def list_project_members(
    project_id: str,
    current_user: Dict = Depends(get_current_user),
    service: ProjectPermissionService = Depends(get_permission_service)
):
    """List project members with effective permissions and detected template"""
    return service.list_members(current_user, project_id)


@router.get("/projects/{project_id}/permissions/{user_id}", response_model=MemberPermissionsResponse)
async def get_member_permissions(
    project_id: str,
    user_id: str,
    current_user: Dict = Depends(get_current_user),
    service: ProjectPermissionService = Depends(get_permission_service)
):
    """Fetch a user's permissions for a project (own, or with permission management rights)"""
    return service.get_member_permissions(current_user, project_id, user_id)


@router.put("/projects/{project_id}/permissions/{user_id}", response_model=MemberPermissionsUpdateResponse)
async def update_member_permissions(
    project_id: str,
    user_id: str,
    body: MemberPermissionsUpdate,
    current_user: Dict = Depends(get_current_user),
    service: ProjectPermissionService = Depends(get_permission_service)
):
    """Replace all permissions for a user in a project"""
    return service.update_member_permissions(current_user, project_id, user_id, body.permissions)
