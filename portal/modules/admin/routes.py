from fastapi import APIRouter, Depends
from portal.core.dependencies import get_project_access, require_super_admin
from portal.database.supabase_client import get_service_supabase
from portal.modules.admin.schemas import AdminUserListResponse, SuperAdminStatusResponse, SuperAdminStatusUpdate
from portal.modules.admin.service import AdminService
from portal.modules.projects.service import SupabaseProjectAccess
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_service(
    supabase: Client = Depends(get_service_supabase),
    access: SupabaseProjectAccess = Depends(get_project_access)
) -> AdminService:
    return AdminService(supabase, access)


@router.get("/users", response_model=AdminUserListResponse)
async def list_users(
    page: int = 1,
    page_size: int = 20,
    query: Optional[str] = None,
    user_data: Dict = Depends(require_super_admin),
    service: AdminService = Depends(get_admin_service)
):
    """List all users with their super admin status"""
    return service.list_users(page=page, page_size=page_size, query=query)


@router.get("/users/{user_id}/super-admin", response_model=SuperAdminStatusResponse)
async def get_super_admin_status(
    user_id: str,
    user_data: Dict = Depends(require_super_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_super_admin_status(user_id)


@router.put("/users/{user_id}/super-admin", response_model=SuperAdminStatusResponse)
async def set_super_admin_status(
    user_id: str,
    body: SuperAdminStatusUpdate,
    user_data: Dict = Depends(require_super_admin),
    service: AdminService = Depends(get_admin_service)
):
    """Toggle super admin status for another user"""
    return service.set_super_admin_status(user_data, user_id, body.is_super_admin)
