from supabase import Client
from portal.core.access import has_super_admin_marker
from portal.core.exceptions import InvalidArgumentError, NotFoundError, UnavailableError
from portal.modules.admin.schemas import AdminUserResponse, AdminUserListResponse, SuperAdminStatusResponse
from portal.modules.projects.service import SupabaseProjectAccess
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class AdminService:
    """Super-admin user management. Requires the service-role client for auth.admin calls."""

    def __init__(self, supabase: Client, access: SupabaseProjectAccess):
        self.supabase = supabase
        self.access = access

    def list_users(self, page: int = 1, page_size: int = 20, query: Optional[str] = None) -> AdminUserListResponse:
        """List auth users merged with their user_roles super admin flag; optional email/name filter"""
        if page < 1 or page_size < 1:
            raise InvalidArgumentError("page and page_size must be positive")
        try:
            auth_users = self.supabase.auth.admin.list_users(page=page, per_page=page_size)
        except Exception as e:
            logger.error(f"Error listing users: {e}")
            raise UnavailableError("Failed to list users") from e

        flags = self.access.list_super_admin_flags()

        users = []
        for auth_user in auth_users:
            metadata = auth_user.user_metadata or {}
            users.append(AdminUserResponse(
                id=auth_user.id,
                email=auth_user.email or "",
                name=metadata.get("name") or metadata.get("full_name") or "",
                created_at=auth_user.created_at,
                is_super_admin=flags.get(auth_user.id, False),
                is_super_admin_by_metadata=has_super_admin_marker({"app_metadata": auth_user.app_metadata}),
            ))

        if query:
            needle = query.lower()
            users = [u for u in users if needle in u.email.lower() or needle in u.name.lower()]

        return AdminUserListResponse(users=users, page=page, page_size=page_size, total=len(users))

    def get_super_admin_status(self, user_id: str) -> SuperAdminStatusResponse:
        return SuperAdminStatusResponse(
            user_id=user_id,
            is_super_admin=self.access.is_super_admin_flag_set(user_id)
        )

    def set_super_admin_status(
        self,
        caller: Dict[str, Any],
        user_id: str,
        is_super_admin: bool
    ) -> SuperAdminStatusResponse:
        """Upsert user_roles.is_super_admin for another user"""
        if caller["id"] == user_id:
            raise InvalidArgumentError("Cannot modify your own super admin status")

        try:
            response = self.supabase.auth.admin.get_user_by_id(user_id)
        except Exception as e:
            logger.warning(f"Lookup of user {user_id} failed: {e}")
            raise NotFoundError("User not found") from e
        if not response or not response.user:
            raise NotFoundError("User not found")

        self.access.set_super_admin_flag(user_id, is_super_admin)
        logger.info(f"{caller['id']} set super admin status of {user_id} to {is_super_admin}")
        return SuperAdminStatusResponse(user_id=user_id, is_super_admin=is_super_admin)
