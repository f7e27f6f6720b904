from supabase import Client
from pydantic import ValidationError
from portal.core.exceptions import UnavailableError
from portal.modules.projects.schemas import ProjectMembership, ProjectMember
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class SupabaseProjectAccess:
    """
    Membership, super-admin flag and permission lookups backed by Supabase.

    Must be constructed with the service-role client: these reads cross RLS
    boundaries. Backend failures surface as UnavailableError; "no row" is a
    normal result and is returned as None / False / [].
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_membership(self, project_id: str, user_id: str) -> Optional[ProjectMembership]:
        """Return the caller's membership in a project together with the owning account"""
        try:
            result = self.supabase.table("project_members")\
                .select("role, project:projects(id, account_id, name)")\
                .eq("project_id", project_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error looking up membership of {user_id} in project {project_id}: {e}")
            raise UnavailableError("Project membership lookup failed") from e

        if not result.data:
            return None

        row = result.data[0]
        project = row.get("project") or {}
        try:
            return ProjectMembership(
                project_id=project.get("id") or project_id,
                user_id=user_id,
                role=row.get("role"),
                account_id=project.get("account_id"),
                project_name=project.get("name"),
            )
        except ValidationError as e:
            # Unknown role or orphaned project row; fail closed
            logger.error(f"Ignoring invalid membership row for {user_id} in project {project_id}: {e}")
            return None

    def is_super_admin_flag_set(self, user_id: str) -> bool:
        """Read user_roles.is_super_admin; a missing row means False"""
        try:
            result = self.supabase.table("user_roles")\
                .select("is_super_admin")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error reading super admin flag for {user_id}: {e}")
            raise UnavailableError("Super admin lookup failed") from e
        if not result.data:
            return False
        return result.data[0].get("is_super_admin") is True

    def set_super_admin_flag(self, user_id: str, is_super_admin: bool) -> None:
        try:
            self.supabase.table("user_roles")\
                .upsert({"user_id": user_id, "is_super_admin": is_super_admin}, on_conflict="user_id")\
                .execute()
        except Exception as e:
            logger.error(f"Error updating super admin flag for {user_id}: {e}")
            raise UnavailableError("Failed to update super admin status") from e

    def list_super_admin_flags(self) -> dict:
        """Map of user_id -> is_super_admin for every user_roles row"""
        try:
            result = self.supabase.table("user_roles")\
                .select("user_id, is_super_admin")\
                .execute()
        except Exception as e:
            logger.error(f"Error listing user roles: {e}")
            raise UnavailableError("Failed to fetch user roles") from e
        return {row["user_id"]: row.get("is_super_admin") is True for row in result.data or []}

    def get_granted_permissions(self, project_id: str, user_id: str) -> List[str]:
        """Explicit grants as stored; values are not validated here"""
        try:
            result = self.supabase.rpc("get_user_permissions", {
                "target_user_id": user_id,
                "target_project_id": project_id
            }).execute()
        except Exception as e:
            logger.error(f"Error fetching permissions of {user_id} in project {project_id}: {e}")
            raise UnavailableError("Permission lookup failed") from e
        if result.data is None:
            return []
        if not isinstance(result.data, list):
            logger.error(f"Unexpected get_user_permissions payload for {user_id}: {result.data!r}")
            raise UnavailableError("Permission lookup returned an invalid result")
        return result.data

    def has_permission(self, project_id: str, user_id: str, permission: str) -> bool:
        try:
            result = self.supabase.rpc("has_permission", {
                "target_user_id": user_id,
                "target_project_id": project_id,
                "target_permission": permission
            }).execute()
        except Exception as e:
            logger.error(f"Error checking {permission} for {user_id} in project {project_id}: {e}")
            raise UnavailableError("Permission check failed") from e
        return result.data is True

    def revoke_all_permissions(self, project_id: str, user_id: str) -> None:
        try:
            self.supabase.rpc("revoke_all_permissions", {
                "target_user_id": user_id,
                "target_project_id": project_id
            }).execute()
        except Exception as e:
            logger.error(f"Error revoking permissions of {user_id} in project {project_id}: {e}")
            raise UnavailableError("Failed to revoke existing permissions") from e

    def grant_permission(self, project_id: str, user_id: str, permission: str) -> bool:
        try:
            result = self.supabase.rpc("grant_permission", {
                "target_user_id": user_id,
                "target_project_id": project_id,
                "target_permission": permission
            }).execute()
        except Exception as e:
            logger.error(f"Error granting {permission} to {user_id} in project {project_id}: {e}")
            raise UnavailableError(f"Failed to grant {permission}") from e
        return result.data is not False

    def list_members(self, project_id: str) -> List[ProjectMember]:
        """Members of a project with profile data; permissions hold the stored grants"""
        try:
            members_result = self.supabase.table("project_members")\
                .select("user_id, role, created_at")\
                .eq("project_id", project_id)\
                .order("created_at")\
                .execute()
            rows = members_result.data or []
            profiles = {}
            if rows:
                accounts_result = self.supabase.table("accounts")\
                    .select("id, name, email, picture_url")\
                    .in_("id", [m["user_id"] for m in rows])\
                    .execute()
                profiles = {a["id"]: a for a in accounts_result.data or []}
        except Exception as e:
            logger.error(f"Error listing members of project {project_id}: {e}")
            raise UnavailableError("Failed to list project members") from e

        members = []
        for row in rows:
            profile = profiles.get(row["user_id"], {})
            try:
                members.append(ProjectMember(
                    user_id=row["user_id"],
                    email=profile.get("email") or "",
                    display_name=profile.get("name"),
                    avatar_url=profile.get("picture_url"),
                    role=row.get("role"),
                    permissions=self.get_granted_permissions(project_id, row["user_id"]),
                    joined_at=row.get("created_at"),
                ))
            except ValidationError as e:
                logger.error(f"Skipping invalid member row {row.get('user_id')} in project {project_id}: {e}")
        return members
